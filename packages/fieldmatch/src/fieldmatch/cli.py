"""CLI tool for matching import values against canonical reference data."""

import argparse
from pathlib import Path

import pandas as pd
import structlog

from fieldmatch.aliases import DEFAULT_REGISTRY
from fieldmatch.classifier import classify
from fieldmatch.evaluation import evaluate, load_labeled_terms
from fieldmatch.io import read_candidates, result_to_row
from fieldmatch.logging import configure_logging
from fieldmatch.matcher import FieldMatcher
from fieldmatch.types import FIELD_TYPES

TIERS = ["AUTO_ACCEPT", "AUTO_CORRECTED", "SMART_AUTO_ACCEPT", "BEST_GUESS", "REJECT"]


def cmd_match(args: argparse.Namespace) -> None:
    candidates = read_candidates(args.candidates)
    matcher = FieldMatcher()
    matches = matcher.find_matches(args.term, candidates, args.field)
    decision = classify(matches, matcher.config.thresholds)

    if not matches:
        print(f'No matches for "{args.term}" ({args.field})')
    else:
        print(f'=== Matches for "{args.term}" ({args.field}) ===')
        for m in matches[: args.top]:
            print(f"  {m.similarity:>3}  {m.match_type:<8} {m.name}  [{m.id}]")

    chosen = decision.match.name if decision.match else "-"
    print(f"\nDecision: {decision.tier} -> {chosen}")
    if decision.reasons:
        print(f"Reasons: {', '.join(decision.reasons)}")


def _read_table(path: str) -> pd.DataFrame:
    if Path(path).suffix in (".xlsx", ".xls"):
        return pd.read_excel(path)
    return pd.read_csv(path)


def _write_table(df: pd.DataFrame, path: str) -> None:
    if Path(path).suffix in (".xlsx", ".xls"):
        df.to_excel(path, index=False)
    else:
        df.to_csv(path, index=False)


def cmd_batch(args: argparse.Namespace) -> None:
    log = structlog.get_logger()
    log.info("load_files_start", input=args.input, candidates=args.candidates)
    table = _read_table(args.input)
    if args.column not in table.columns:
        raise KeyError(f"column '{args.column}' not found in {args.input}")

    values = table[args.column].fillna("").astype(str).tolist()
    candidates = read_candidates(args.candidates)
    log.info("files_loaded", rows=len(values), candidates=len(candidates))

    matcher = FieldMatcher()
    results = matcher.match_all(values, candidates, args.field)

    df_out = pd.DataFrame([result_to_row(r) for r in results])

    if args.show:
        _show_review(df_out)

    _print_summary(df_out)
    _print_stats(matcher)
    _write_table(df_out, args.output)
    print(f"\nSaved to: {args.output}")


def _show_review(df: pd.DataFrame) -> None:
    """Display rows that need a human reviewer."""
    review = df[df["tier"].isin(["BEST_GUESS", "REJECT"])]
    if review.empty:
        print("\n=== Nothing to review ===")
        return
    print(f"\n=== Needs review ({len(review)}) ===")
    print(review[["search_term", "match_name", "similarity", "tier"]].to_string(index=False))


def _print_summary(df: pd.DataFrame) -> None:
    parts = [f"{tier}={(df['tier'] == tier).sum()}" for tier in TIERS]
    print(f"\nResults: {', '.join(parts)}")
    if len(df) > 0:
        accepted = (df["tier"] != "REJECT").sum()
        print(f"Accepted: {round(accepted / len(df) * 100)}% ({accepted}/{len(df)})")


def _print_stats(matcher: FieldMatcher) -> None:
    s = matcher.stats
    print("\n--- Statistics ---")
    print(f"Rows: {s.rows}")
    print(f"Comparisons: {s.comparisons}")
    print(f"Empty values: {s.invalid_terms}")
    print(f"No matches: {s.no_matches}")


def cmd_evaluate(args: argparse.Namespace) -> None:
    terms = load_labeled_terms(args.labels)
    candidates = read_candidates(args.candidates)
    metrics, _ = evaluate(terms, candidates, args.field)

    print(f"Terms: {metrics.total_terms}")
    print(f"Accepted correct: {metrics.accepted_correct}")
    print(f"Accepted wrong: {metrics.accepted_wrong}")
    print(f"Missed: {metrics.missed}")
    print(f"True rejects: {metrics.true_rejects}")
    print(f"Needs review: {metrics.review_count}")
    print(f"Precision: {metrics.precision:.3f}  Recall: {metrics.recall:.3f}  F1: {metrics.f1:.3f}")
    for tier in TIERS:
        wrong = metrics.wrong_tiers.get(tier, 0)
        print(f"  {tier}: {metrics.tiers.get(tier, 0)} (wrong: {wrong})")


def cmd_aliases(args: argparse.Namespace) -> None:
    table = DEFAULT_REGISTRY.table(args.field)
    print(f"=== Aliases for {args.field} ({len(table)}) ===")
    for alias, target in sorted(table.items()):
        print(f"  {alias} -> {target}")


def main() -> None:
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parent_parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    parser = argparse.ArgumentParser(
        description="Fuzzy field matching CLI",
        parents=[parent_parser],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    match_parser = subparsers.add_parser("match", parents=[parent_parser], help="Match a single value")
    match_parser.add_argument("term", help="Value to match")
    match_parser.add_argument("--field", choices=FIELD_TYPES, default="cities", help="Field type")
    match_parser.add_argument("--candidates", required=True, help="Reference records (CSV or JSONL)")
    match_parser.add_argument("--top", type=int, default=5, help="Number of matches to show")
    match_parser.set_defaults(func=cmd_match)

    batch_parser = subparsers.add_parser("batch", parents=[parent_parser], help="Match a column of values")
    batch_parser.add_argument("--input", required=True, help="Spreadsheet with values (CSV or XLSX)")
    batch_parser.add_argument("--column", required=True, help="Column holding the values")
    batch_parser.add_argument("--field", choices=FIELD_TYPES, default="cities", help="Field type")
    batch_parser.add_argument("--candidates", required=True, help="Reference records (CSV or JSONL)")
    batch_parser.add_argument("--output", default="matching_results.csv", help="Output file path")
    batch_parser.add_argument("--show", action="store_true", help="Display rows needing review")
    batch_parser.set_defaults(func=cmd_batch)

    eval_parser = subparsers.add_parser("evaluate", parents=[parent_parser], help="Evaluate tiers on labeled terms")
    eval_parser.add_argument("--labels", required=True, help="CSV with term,expected_id")
    eval_parser.add_argument("--field", choices=FIELD_TYPES, default="cities", help="Field type")
    eval_parser.add_argument("--candidates", required=True, help="Reference records (CSV or JSONL)")
    eval_parser.set_defaults(func=cmd_evaluate)

    aliases_parser = subparsers.add_parser("aliases", parents=[parent_parser], help="List built-in aliases")
    aliases_parser.add_argument("--field", choices=FIELD_TYPES, default="cities", help="Field type")
    aliases_parser.set_defaults(func=cmd_aliases)

    args = parser.parse_args()
    configure_logging(args.log_level, json_logs=args.json_logs)
    args.func(args)


if __name__ == "__main__":
    main()
