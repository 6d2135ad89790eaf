"""Multi-strategy similarity scoring of a search term against one candidate.

Each strategy is an independent function returning an optional score. The
composite score is the maximum over all strategies, never an average, so a
single strong signal wins even when the others disagree.

Record strategies (exact, alias) look at the whole candidate and run first;
the first one that fires decides the result. Otherwise the text strategies
(pattern, contains, word overlap, character) run against every name field of
the candidate and the best field is kept.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from fieldmatch.aliases import DEFAULT_REGISTRY, AliasRegistry
from fieldmatch.config import MatchConfig
from fieldmatch.distance import round_half_up, similarity
from fieldmatch.patterns import PatternMatcher
from fieldmatch.types import CandidateRecord, MatchType


@dataclass
class ScoringContext:
    """Everything a strategy may consult besides the two strings."""

    config: MatchConfig = field(default_factory=MatchConfig)
    aliases: AliasRegistry = DEFAULT_REGISTRY
    patterns: PatternMatcher | None = None
    field_type: str | None = None

    def __post_init__(self) -> None:
        if self.patterns is None:
            self.patterns = PatternMatcher(config=self.config.patterns)


@dataclass(frozen=True)
class StrategyScore:
    score: int
    match_type: MatchType
    strategy: str


def normalize_text(text: str | None) -> str:
    return (text or "").lower().strip()


# --- record strategies -----------------------------------------------------

def exact_strategy(term: str, names: list[str], ctx: ScoringContext) -> StrategyScore | None:
    if term in names:
        return StrategyScore(100, "exact", "exact")
    return None


def alias_strategy(term: str, names: list[str], ctx: ScoringContext) -> StrategyScore | None:
    if ctx.field_type is None:
        return None
    target = ctx.aliases.lookup(ctx.field_type, term)
    if not target:
        return None
    for name in names:
        if target in name or name in target:
            return StrategyScore(ctx.config.scoring.alias_score, "alias", "alias")
    return None


RecordStrategy = Callable[[str, list[str], ScoringContext], "StrategyScore | None"]

RECORD_STRATEGIES: tuple[RecordStrategy, ...] = (exact_strategy, alias_strategy)


# --- text strategies -------------------------------------------------------

def pattern_strategy(term: str, target: str, ctx: ScoringContext) -> float | None:
    score = ctx.patterns.boosted_score(term, target, ctx.field_type)
    return float(score) if score > 0 else None


def contains_strategy(term: str, target: str, ctx: ScoringContext) -> float | None:
    if term not in target and target not in term:
        return None
    cfg = ctx.config.scoring
    shorter = min(len(term), len(target))
    longer = max(len(term), len(target))
    if shorter >= cfg.contains_min_length:
        return shorter / longer * cfg.contains_weight
    # 2-3 character containment is weak evidence and is discounted
    if shorter >= cfg.short_contains_min_length:
        return shorter / longer * cfg.short_contains_weight
    return None


def word_overlap_strategy(term: str, target: str, ctx: ScoringContext) -> float | None:
    cfg = ctx.config.words
    term_words = term.split()
    target_words = target.split()
    if not term_words or not target_words:
        return None

    matched = 0
    exact = 0
    for word in term_words:
        if word in target_words:
            matched += 1
            exact += 1
        elif any(similarity(word, other) > cfg.fuzzy_word_similarity for other in target_words):
            matched += 1

    if matched == 0:
        return None

    # "sleman" inside "kabupaten sleman" is a meaningful single-word hit
    if len(term_words) == 1 and exact > 0:
        return float(cfg.single_word_score)

    total = max(len(term_words), len(target_words))
    if exact > 0:
        return matched / total * cfg.perfect_weight + exact / total * cfg.perfect_bonus
    return matched / total * cfg.partial_weight


def character_strategy(term: str, target: str, ctx: ScoringContext) -> float | None:
    return float(similarity(term, target))


TextStrategy = Callable[[str, str, ScoringContext], "float | None"]

TEXT_STRATEGIES: tuple[TextStrategy, ...] = (
    pattern_strategy,
    contains_strategy,
    word_overlap_strategy,
    character_strategy,
)


# --- orchestration ---------------------------------------------------------

def text_match_type(score: int, ctx: ScoringContext) -> MatchType:
    return "partial" if score > ctx.config.scoring.partial_threshold else "fuzzy"


def score(
    term: str,
    candidate_name: str,
    field_type: str | None = None,
    ctx: ScoringContext | None = None,
) -> int:
    """Composite 0-100 similarity of `term` against one candidate name."""
    if ctx is None:
        ctx = ScoringContext(field_type=field_type)
    elif field_type is not None and ctx.field_type != field_type:
        ctx = ScoringContext(ctx.config, ctx.aliases, ctx.patterns, field_type)

    clean_term = normalize_text(term)
    clean_target = normalize_text(candidate_name)
    if not clean_term or not clean_target:
        return 0
    if clean_term == clean_target:
        return 100

    best = 0.0
    for strategy in TEXT_STRATEGIES:
        result = strategy(clean_term, clean_target, ctx)
        if result is not None and result > best:
            best = result
    return max(0, min(100, round_half_up(best)))


def score_field(
    term: str,
    candidate: CandidateRecord,
    field_type: str | None = None,
    ctx: ScoringContext | None = None,
) -> tuple[int, MatchType]:
    """Best (similarity, match_type) of `term` over a candidate's name fields."""
    if ctx is None:
        ctx = ScoringContext(field_type=field_type)
    elif field_type is not None and ctx.field_type != field_type:
        ctx = ScoringContext(ctx.config, ctx.aliases, ctx.patterns, field_type)

    clean_term = normalize_text(term)
    names = [normalize_text(n) for n in candidate.names]
    names = [n for n in names if n]
    if not clean_term or not names:
        return 0, "fuzzy"

    for strategy in RECORD_STRATEGIES:
        result = strategy(clean_term, names, ctx)
        if result is not None:
            return result.score, result.match_type

    best = max(score(clean_term, name, ctx=ctx) for name in names)
    return best, text_match_type(best, ctx)
