"""Evaluation of decision tiers against labeled import values.

Used to tune thresholds: each labeled term is matched against the reference
list, and the tier decision is compared with the expected record id.
"""

from __future__ import annotations

import csv
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fieldmatch.config import MatchConfig
from fieldmatch.matcher import FieldMatcher
from fieldmatch.types import CandidateRecord, MatchResult


@dataclass
class EvalMetrics:
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0
    total_terms: int = 0
    accepted_correct: int = 0
    accepted_wrong: int = 0
    missed: int = 0  # expected a record, got a reject
    true_rejects: int = 0
    review_count: int = 0
    tiers: dict[str, int] = field(default_factory=dict)
    wrong_tiers: dict[str, int] = field(default_factory=dict)


@dataclass
class LabeledTerm:
    term: str
    expected_id: str | None  # None = no record should be picked


def load_labeled_terms(path: str | Path) -> list[LabeledTerm]:
    """Load labeled terms from CSV (term, expected_id); blank id means no match."""
    path = Path(path)
    terms: list[LabeledTerm] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            expected = (row.get("expected_id") or "").strip()
            terms.append(LabeledTerm(
                term=row["term"].strip(),
                expected_id=expected or None,
            ))
    return terms


def evaluate(
    terms: list[LabeledTerm],
    candidates: Sequence[CandidateRecord | Mapping[str, Any]],
    field_type: str,
    config: MatchConfig | None = None,
) -> tuple[EvalMetrics, list[MatchResult]]:
    """Match every labeled term and score the accept/reject decisions."""
    matcher = FieldMatcher(config)
    results = matcher.match_all([t.term for t in terms], list(candidates), field_type)

    metrics = EvalMetrics(total_terms=len(terms))
    tiers: Counter[str] = Counter()
    wrong_tiers: Counter[str] = Counter()

    for labeled, result in zip(terms, results):
        tiers[result.tier] += 1
        accepted = result.tier != "REJECT"

        if result.tier in ("BEST_GUESS", "REJECT"):
            metrics.review_count += 1

        if accepted and result.match_id == labeled.expected_id:
            metrics.accepted_correct += 1
        elif accepted:
            metrics.accepted_wrong += 1
            wrong_tiers[result.tier] += 1
        elif labeled.expected_id is not None:
            metrics.missed += 1
        else:
            metrics.true_rejects += 1

    if metrics.accepted_correct + metrics.accepted_wrong > 0:
        metrics.precision = metrics.accepted_correct / (
            metrics.accepted_correct + metrics.accepted_wrong
        )
    expected_total = sum(1 for t in terms if t.expected_id is not None)
    if expected_total > 0:
        metrics.recall = metrics.accepted_correct / expected_total
    if metrics.precision + metrics.recall > 0:
        metrics.f1 = (
            2 * metrics.precision * metrics.recall
            / (metrics.precision + metrics.recall)
        )

    metrics.tiers = dict(tiers)
    metrics.wrong_tiers = dict(wrong_tiers)
    return metrics, results
