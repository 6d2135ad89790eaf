"""Per-field alias tables mapping abbreviations to canonical name fragments."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

DATA_DIR = Path(os.environ.get("FIELDMATCH_DATA") or Path(__file__).resolve().parent / "data")


def _load_alias_tables() -> dict[str, dict[str, str]]:
    """Load the built-in alias tables from aliases.json."""
    path = DATA_DIR / "aliases.json"
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


ALIAS_TABLES: dict[str, dict[str, str]] = _load_alias_tables()


def _clean(text: str) -> str:
    return text.lower().strip()


class AliasRegistry:
    """Read-only lookup of aliases, scoped per field type.

    Lookup is an exact key match after lower-casing and trimming; fuzzy
    matching against the alias target happens in the scoring layer.
    """

    def __init__(self, tables: Mapping[str, Mapping[str, str]] | None = None) -> None:
        source = ALIAS_TABLES if tables is None else tables
        self._tables: dict[str, dict[str, str]] = {
            field_type: {_clean(k): _clean(v) for k, v in table.items()}
            for field_type, table in source.items()
        }

    def lookup(self, field_type: str, token: str) -> str | None:
        """Return the canonical fragment for `token`, or None."""
        table = self._tables.get(field_type)
        if not table or not token:
            return None
        return table.get(_clean(token))

    def field_types(self) -> list[str]:
        return sorted(self._tables)

    def table(self, field_type: str) -> dict[str, str]:
        """Copy of one field's alias table."""
        return dict(self._tables.get(field_type, {}))

    def with_overrides(self, extra: Mapping[str, Mapping[str, str]]) -> AliasRegistry:
        """Build a new registry with `extra` aliases layered over these."""
        merged = {ft: dict(table) for ft, table in self._tables.items()}
        for field_type, table in extra.items():
            merged.setdefault(field_type, {}).update(table)
        return AliasRegistry(merged)

    def __len__(self) -> int:
        return sum(len(t) for t in self._tables.values())


DEFAULT_REGISTRY = AliasRegistry()
