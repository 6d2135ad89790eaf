"""Prefix/suffix stripping for institutional boilerplate in canonical names.

Reference data is full of "Bank ", "Kabupaten ", " Tbk" and the like, which
free-text import values usually leave out. The pattern matcher strips these
affixes and re-scores the remaining core so that "Sleman" can still reach
"Kabupaten Sleman".
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass

from fieldmatch.aliases import DATA_DIR
from fieldmatch.config import PatternConfig
from fieldmatch.distance import similarity


@dataclass(frozen=True)
class AffixSet:
    prefixes: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()

    def __or__(self, other: AffixSet) -> AffixSet:
        return AffixSet(
            prefixes=_unique(self.prefixes + other.prefixes),
            suffixes=_unique(self.suffixes + other.suffixes),
        )


def _unique(items: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _load_affixes() -> dict[str, AffixSet]:
    """Load per-field prefix/suffix lists from patterns.json."""
    path = DATA_DIR / "patterns.json"
    if not path.exists():
        return {}
    raw = json.loads(path.read_text(encoding="utf-8"))
    return {
        field_type: AffixSet(
            prefixes=tuple(p.lower() for p in entry.get("prefixes", [])),
            suffixes=tuple(s.lower() for s in entry.get("suffixes", [])),
        )
        for field_type, entry in raw.items()
    }


AFFIXES: dict[str, AffixSet] = _load_affixes()


def strip_prefixes(text: str, affixes: AffixSet) -> list[str]:
    """Cores left after removing each matching prefix."""
    cores: list[str] = []
    for prefix in affixes.prefixes:
        if text.startswith(prefix):
            core = text[len(prefix):].strip()
            if core:
                cores.append(core)
    return cores


def strip_suffixes(text: str, affixes: AffixSet) -> list[str]:
    """Cores left after removing each matching suffix."""
    cores: list[str] = []
    for suffix in affixes.suffixes:
        if text.endswith(suffix):
            core = text[: len(text) - len(suffix)].strip()
            if core:
                cores.append(core)
    return cores


def core_forms(text: str, affixes: AffixSet) -> list[str]:
    """All stripped forms: prefix, suffix, and prefix then suffix."""
    prefixed = strip_prefixes(text, affixes)
    forms = list(prefixed) + strip_suffixes(text, affixes)
    for core in prefixed:
        forms.extend(strip_suffixes(core, affixes))
    return list(dict.fromkeys(f for f in forms if f != text))


class PatternMatcher:
    """Scores input/candidate pairs on their affix-stripped cores."""

    def __init__(
        self,
        affixes: Mapping[str, AffixSet] | None = None,
        config: PatternConfig | None = None,
    ) -> None:
        self.affixes: dict[str, AffixSet] = dict(AFFIXES if affixes is None else affixes)
        self.config = config or PatternConfig()

    def affixes_for(self, field_type: str | None) -> AffixSet:
        """Affixes for one field type; every list when field_type is None."""
        if field_type is None:
            combined = AffixSet()
            for affix_set in self.affixes.values():
                combined = combined | affix_set
            return combined
        return self.affixes.get(field_type, AffixSet())

    def boosted_score(self, text: str, candidate_name: str, field_type: str | None = None) -> int:
        """Best core score for the pair, or 0 when no affix applies.

        Both arguments are expected lower-cased and trimmed.
        """
        affixes = self.affixes_for(field_type)
        if not affixes.prefixes and not affixes.suffixes:
            return 0

        pairs: list[tuple[str, str]] = []
        # Candidate carries the boilerplate, input is the bare core
        pairs.extend((text, core) for core in core_forms(candidate_name, affixes))
        # Input carries the boilerplate, candidate is the bare core
        pairs.extend((core, candidate_name) for core in strip_prefixes(text, affixes))
        # Both carry a (possibly different) prefix: "kab sleman" / "kabupaten sleman".
        # Suffixes are directional ("utara", "selatan") and never stripped from both.
        for text_core in strip_prefixes(text, affixes):
            pairs.extend(
                (text_core, candidate_core)
                for candidate_core in strip_prefixes(candidate_name, affixes)
            )

        best = 0
        for left, right in pairs:
            best = max(best, self._core_score(left, right))
        return best

    def _core_score(self, left: str, right: str) -> int:
        cfg = self.config
        if left == right:
            return cfg.exact_core_score
        core_score = similarity(left, right)
        if core_score > cfg.min_core_similarity:
            return min(cfg.boosted_cap, core_score + cfg.core_boost)
        return 0
