"""Edit distance and normalized character similarity."""

from __future__ import annotations

import math

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character edits turning `a` into `b` (case-sensitive)."""
    return Levenshtein.distance(a, b)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (Python rounds to even)."""
    return int(math.floor(value + 0.5))


def similarity(a: str, b: str) -> int:
    """Character-level similarity on a 0-100 scale.

    Both strings are lower-cased and stripped first. Empty input scores 0;
    callers that treat two empty strings as identical must check that
    themselves.
    """
    if not a or not b:
        return 0

    clean_a = a.lower().strip()
    clean_b = b.lower().strip()

    if clean_a == clean_b:
        return 100

    max_len = max(len(clean_a), len(clean_b))
    distance = levenshtein_distance(clean_a, clean_b)
    score = round_half_up((max_len - distance) / max_len * 100)
    return max(0, min(100, score))
