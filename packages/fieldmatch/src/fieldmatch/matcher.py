"""Field matching service: rank candidates, then classify the ranking."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from fieldmatch.aliases import DEFAULT_REGISTRY, AliasRegistry
from fieldmatch.classifier import classify
from fieldmatch.config import MatchConfig
from fieldmatch.patterns import PatternMatcher
from fieldmatch.scoring import ScoringContext, score_field
from fieldmatch.types import FIELD_TYPES, CandidateRecord, FieldMatch, MatchResult

log = structlog.get_logger()


@dataclass
class MatcherStats:
    """Statistics collected during a batch."""

    rows: int = 0
    comparisons: int = 0
    invalid_terms: int = 0
    no_matches: int = 0
    tiers: dict[str, int] = field(default_factory=lambda: {
        "AUTO_ACCEPT": 0,
        "AUTO_CORRECTED": 0,
        "SMART_AUTO_ACCEPT": 0,
        "BEST_GUESS": 0,
        "REJECT": 0,
    })


def _as_candidate(item: Any) -> CandidateRecord | None:
    if isinstance(item, CandidateRecord):
        if isinstance(item.name, str) and item.name.strip():
            return item
        return None
    if isinstance(item, Mapping):
        try:
            return CandidateRecord.from_mapping(item)
        except ValueError:
            return None
    return None


class FieldMatcher:
    """Matches free-text import values against canonical reference records."""

    def __init__(
        self,
        config: MatchConfig | None = None,
        aliases: AliasRegistry | None = None,
        patterns: PatternMatcher | None = None,
    ) -> None:
        self.config = config or MatchConfig()
        self.aliases = aliases or DEFAULT_REGISTRY
        self.patterns = patterns or PatternMatcher(config=self.config.patterns)
        self.stats = MatcherStats()

    def _context(self, field_type: str) -> ScoringContext:
        return ScoringContext(
            config=self.config,
            aliases=self.aliases,
            patterns=self.patterns,
            field_type=field_type,
        )

    def find_matches(
        self,
        search_term: Any,
        candidates: Any,
        field_type: str = "cities",
    ) -> list[FieldMatch]:
        """Rank candidates for `search_term`, best first.

        Never raises on bad data: an invalid term, candidate container or
        field type yields an empty list, and malformed candidates are skipped.
        Each anomaly is logged as a warning.
        """
        if not isinstance(search_term, str) or not search_term.strip():
            log.warning("invalid_search_term", field_type=field_type, search_term=repr(search_term))
            return []

        if not isinstance(candidates, (list, tuple)):
            log.warning("invalid_candidates", field_type=field_type, kind=type(candidates).__name__)
            return []

        if field_type not in FIELD_TYPES:
            log.warning("unknown_field_type", field_type=field_type)
            return []

        ctx = self._context(field_type)
        floor = self.config.scoring.min_similarity
        matches: list[FieldMatch] = []

        for position, item in enumerate(candidates):
            candidate = _as_candidate(item)
            if candidate is None:
                log.warning("malformed_candidate", field_type=field_type, position=position)
                continue

            similarity, match_type = score_field(search_term, candidate, ctx=ctx)
            if similarity > floor:
                matches.append(FieldMatch.from_candidate(candidate, similarity, match_type))

        # sorted() is stable, so ties keep candidate order
        return sorted(matches, key=lambda m: m.similarity, reverse=True)

    def match_one(
        self,
        search_term: Any,
        candidates: Sequence[CandidateRecord | Mapping[str, Any]],
        field_type: str = "cities",
        row_id: int = 0,
    ) -> MatchResult:
        """Match one import value and classify the ranking."""
        self.stats.rows += 1
        term = search_term if isinstance(search_term, str) else ""
        if not term.strip():
            self.stats.invalid_terms += 1
        elif isinstance(candidates, (list, tuple)):
            self.stats.comparisons += len(candidates)

        matches = self.find_matches(search_term, candidates, field_type)
        if not matches:
            self.stats.no_matches += 1

        decision = classify(matches, self.config.thresholds)
        self.stats.tiers[decision.tier] += 1

        log.debug(
            "match_one_done",
            row_id=row_id,
            search_term=term,
            field_type=field_type,
            tier=decision.tier,
            match=decision.match.name if decision.match else None,
            similarity=decision.similarity,
            margin=decision.margin,
        )

        best = decision.match or (matches[0] if matches else None)
        return MatchResult(
            row_id=row_id,
            search_term=term,
            field_type=field_type,
            match_id=decision.match.id if decision.match else None,
            match_name=decision.match.name if decision.match else None,
            tier=decision.tier,
            similarity=best.similarity if best else 0,
            match_type=best.match_type if best else None,
            runner_up_similarity=decision.runner_up_similarity,
            margin=decision.margin,
            reasons=list(decision.reasons),
            debug={
                "top_candidates": [m.to_dict() for m in matches[:5]],
                "candidate_count": len(matches),
            },
        )

    def match_all(
        self,
        search_terms: Sequence[Any],
        candidates: Sequence[CandidateRecord | Mapping[str, Any]],
        field_type: str = "cities",
    ) -> list[MatchResult]:
        """Match a column of import values against one reference list."""
        log.info("match_all_start", rows=len(search_terms), field_type=field_type)
        results: list[MatchResult] = []
        for i, term in enumerate(search_terms):
            results.append(self.match_one(term, candidates, field_type, row_id=i))
            if (i + 1) % 1000 == 0:
                log.info("match_progress", processed=i + 1, total=len(search_terms))
        log.info("match_all_done", rows=len(results), tiers=dict(self.stats.tiers))
        return results


_DEFAULT_MATCHER = FieldMatcher()


def find_matches(
    search_term: Any,
    candidates: Any,
    field_type: str = "cities",
    config: MatchConfig | None = None,
) -> list[FieldMatch]:
    """Rank `candidates` for `search_term` under `field_type`."""
    matcher = _DEFAULT_MATCHER if config is None else FieldMatcher(config)
    return matcher.find_matches(search_term, candidates, field_type)


def find_province_matches(search_term: Any, provinces: Any) -> list[FieldMatch]:
    return find_matches(search_term, provinces, "provinces")


def find_city_matches(search_term: Any, cities: Any) -> list[FieldMatch]:
    return find_matches(search_term, cities, "cities")


def find_location_matches(search_term: Any, locations: Any, field_type: str = "cities") -> list[FieldMatch]:
    """Province or city matching; any other field type is rejected."""
    if field_type not in ("provinces", "cities"):
        log.warning("unknown_field_type", field_type=field_type)
        return []
    return find_matches(search_term, locations, field_type)


def find_subject_matches(search_term: Any, subjects: Any) -> list[FieldMatch]:
    return find_matches(search_term, subjects, "subjects")


def find_bank_matches(search_term: Any, banks: Any) -> list[FieldMatch]:
    return find_matches(search_term, banks, "banks")


def find_category_matches(search_term: Any, categories: Any) -> list[FieldMatch]:
    return find_matches(search_term, categories, "categories")
