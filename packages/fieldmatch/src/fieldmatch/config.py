"""Configuration for the fieldmatch fuzzy field-matching engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Thresholds:
    auto_accept: int = 95
    auto_corrected: int = 85
    smart_accept: int = 60
    best_guess: int = 50
    margin: int = 10  # smart accept needs a lead strictly greater than this


@dataclass
class PatternConfig:
    exact_core_score: int = 95
    min_core_similarity: int = 80
    core_boost: int = 10
    boosted_cap: int = 90


@dataclass
class WordOverlapConfig:
    fuzzy_word_similarity: int = 80
    single_word_score: int = 80
    perfect_weight: float = 85.0
    perfect_bonus: float = 10.0
    partial_weight: float = 75.0


@dataclass
class ScoringConfig:
    min_similarity: int = 50  # candidates must score strictly above this
    alias_score: int = 95
    partial_threshold: int = 85
    contains_weight: float = 90.0
    short_contains_weight: float = 75.0
    contains_min_length: int = 4
    short_contains_min_length: int = 2


@dataclass
class MatchConfig:
    thresholds: Thresholds = field(default_factory=Thresholds)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    patterns: PatternConfig = field(default_factory=PatternConfig)
    words: WordOverlapConfig = field(default_factory=WordOverlapConfig)
