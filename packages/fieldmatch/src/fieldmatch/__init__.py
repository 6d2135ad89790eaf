"""fieldmatch - Fuzzy matching of import values to canonical reference records."""

from fieldmatch.aliases import AliasRegistry
from fieldmatch.classifier import classify
from fieldmatch.config import MatchConfig
from fieldmatch.distance import similarity
from fieldmatch.matcher import (
    FieldMatcher,
    MatcherStats,
    find_bank_matches,
    find_category_matches,
    find_city_matches,
    find_location_matches,
    find_matches,
    find_province_matches,
    find_subject_matches,
)
from fieldmatch.patterns import PatternMatcher
from fieldmatch.types import CandidateRecord, Decision, FieldMatch, MatchResult

__all__ = [
    "AliasRegistry",
    "CandidateRecord",
    "Decision",
    "FieldMatch",
    "FieldMatcher",
    "MatchConfig",
    "MatchResult",
    "MatcherStats",
    "PatternMatcher",
    "classify",
    "find_bank_matches",
    "find_category_matches",
    "find_city_matches",
    "find_location_matches",
    "find_matches",
    "find_province_matches",
    "find_subject_matches",
    "similarity",
]
