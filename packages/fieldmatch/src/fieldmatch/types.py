"""Core types for the fieldmatch fuzzy field-matching engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

FieldType = Literal["provinces", "cities", "subjects", "banks", "categories"]

FIELD_TYPES: tuple[str, ...] = ("provinces", "cities", "subjects", "banks", "categories")

MatchType = Literal["exact", "alias", "partial", "fuzzy"]

Tier = Literal[
    "AUTO_ACCEPT",
    "AUTO_CORRECTED",
    "SMART_AUTO_ACCEPT",
    "BEST_GUESS",
    "REJECT",
]


@dataclass(frozen=True)
class CandidateRecord:
    """A canonical reference record supplied by the caller."""

    id: str
    name: str
    local_name: str | None = None
    alternate_name: str | None = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> CandidateRecord:
        """Build a record from a reference-data row (e.g. a table query result).

        Raises ValueError when the row has no usable name.
        """
        name = row.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("candidate has no name")
        return cls(
            id="" if row.get("id") is None else str(row["id"]),
            name=name,
            local_name=_optional_str(row.get("local_name")),
            alternate_name=_optional_str(row.get("alternate_name")),
        )

    @property
    def names(self) -> list[str]:
        """Non-empty name variants in priority order."""
        return [n for n in (self.name, self.local_name, self.alternate_name) if n]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class FieldMatch:
    id: str
    name: str
    local_name: str | None
    alternate_name: str | None
    similarity: int
    match_type: MatchType

    @classmethod
    def from_candidate(
        cls, candidate: CandidateRecord, similarity: int, match_type: MatchType
    ) -> FieldMatch:
        return cls(
            id=candidate.id,
            name=candidate.name,
            local_name=candidate.local_name,
            alternate_name=candidate.alternate_name,
            similarity=similarity,
            match_type=match_type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "local_name": self.local_name,
            "alternate_name": self.alternate_name,
            "similarity": self.similarity,
            "match_type": self.match_type,
        }


@dataclass(frozen=True)
class Decision:
    """Decision tier for a ranked match list."""

    tier: Tier
    match: FieldMatch | None = None
    runner_up_similarity: int | None = None
    margin: int | None = None
    reasons: tuple[str, ...] = ()

    @property
    def similarity(self) -> int:
        return self.match.similarity if self.match is not None else 0

    @property
    def accepted(self) -> bool:
        return self.tier != "REJECT"

    @property
    def needs_review(self) -> bool:
        """Best guesses and rejects are surfaced to a human reviewer."""
        return self.tier in ("BEST_GUESS", "REJECT")


@dataclass
class MatchResult:
    row_id: int
    search_term: str
    field_type: str
    match_id: str | None
    match_name: str | None
    tier: Tier
    similarity: int
    match_type: MatchType | None = None
    runner_up_similarity: int | None = None
    margin: int | None = None
    reasons: list[str] = field(default_factory=list)
    debug: dict = field(default_factory=dict)
