"""CSV/JSONL input of reference records and output of match results."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from fieldmatch.types import CandidateRecord, MatchResult


def read_candidates(
    path: str | Path,
    id_column: str | None = "id",
    name_column: str = "name",
    local_name_column: str = "local_name",
    alternate_name_column: str = "alternate_name",
) -> list[CandidateRecord]:
    """Read canonical reference records from CSV or JSONL.

    Rows without a name are skipped. Without an id column, the row index
    becomes the id.
    """
    path = Path(path)
    columns = (id_column, name_column, local_name_column, alternate_name_column)

    if path.suffix == ".jsonl":
        rows = _read_jsonl_rows(path)
    else:
        rows = _read_csv_rows(path)

    results: list[CandidateRecord] = []
    for i, row in enumerate(rows):
        record = _to_record(i, row, *columns)
        if record is not None:
            results.append(record)
    return results


def _read_csv_rows(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def _read_jsonl_rows(path: Path) -> list[dict]:
    rows: list[dict] = []
    with path.open(encoding="utf-8") as f:
        for line in f:
            if line.strip():
                rows.append(json.loads(line))
    return rows


def _to_record(
    index: int,
    row: dict,
    id_column: str | None,
    name_column: str,
    local_name_column: str,
    alternate_name_column: str,
) -> CandidateRecord | None:
    name = str(row.get(name_column) or "").strip()
    if not name:
        return None
    if id_column and row.get(id_column) not in (None, ""):
        item_id = str(row[id_column]).strip()
    else:
        item_id = str(index)
    return CandidateRecord(
        id=item_id,
        name=name,
        local_name=str(row.get(local_name_column) or "").strip() or None,
        alternate_name=str(row.get(alternate_name_column) or "").strip() or None,
    )


RESULT_FIELDS = [
    "row_id", "search_term", "field_type", "match_id", "match_name", "tier",
    "similarity", "match_type", "runner_up_similarity", "margin", "reasons",
]


def result_to_row(r: MatchResult) -> dict:
    return {
        "row_id": r.row_id,
        "search_term": r.search_term,
        "field_type": r.field_type,
        "match_id": r.match_id or "",
        "match_name": r.match_name or "",
        "tier": r.tier,
        "similarity": r.similarity,
        "match_type": r.match_type or "",
        "runner_up_similarity": r.runner_up_similarity if r.runner_up_similarity is not None else "",
        "margin": r.margin if r.margin is not None else "",
        "reasons": "|".join(r.reasons),
    }


def write_results(
    results: list[MatchResult],
    path: str | Path,
    include_debug: bool = False,
) -> None:
    """Write match results to CSV or JSONL."""
    path = Path(path)

    if path.suffix == ".jsonl":
        _write_jsonl(results, path, include_debug)
    else:
        _write_csv(results, path, include_debug)


def _write_csv(results: list[MatchResult], path: Path, include_debug: bool) -> None:
    fieldnames = list(RESULT_FIELDS)
    if include_debug:
        fieldnames.append("top_candidates")

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            row = result_to_row(r)
            if include_debug:
                row["top_candidates"] = json.dumps(r.debug.get("top_candidates", []))
            writer.writerow(row)


def _write_jsonl(results: list[MatchResult], path: Path, include_debug: bool) -> None:
    with path.open("w", encoding="utf-8") as f:
        for r in results:
            record = {
                "row_id": r.row_id,
                "search_term": r.search_term,
                "field_type": r.field_type,
                "match_id": r.match_id,
                "match_name": r.match_name,
                "tier": r.tier,
                "similarity": r.similarity,
                "match_type": r.match_type,
                "runner_up_similarity": r.runner_up_similarity,
                "margin": r.margin,
                "reasons": r.reasons,
            }
            if include_debug:
                record["debug"] = r.debug
            f.write(json.dumps(record) + "\n")
