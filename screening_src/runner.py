"""CLI runner for preventive screening recommendations.

Usage:
    python -m screening_src.runner --age 67 --sex male --smoking-status current
    python -m screening_src.runner --age 30 --sex female --condition sti-risk --json
    python -m screening_src.runner --csv profiles.csv            # One profile per row
    python -m screening_src.runner --list-rules                  # Catalog order
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

from .config import config
from .profile_reader import read_profile
from .renderer import render_json, render_text
from .rules import SCREENING_RULES, evaluate

logger = logging.getLogger(__name__)

# Separator for multiple conditions in one CSV cell
CSV_CONDITION_SEPARATOR = ";"

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging.

    Args:
        verbose: If True, use DEBUG level.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def fields_from_args(args: argparse.Namespace) -> dict:
    """Collect raw profile fields from parsed CLI arguments."""
    return {
        "age": args.age,
        "sex": args.sex,
        "pregnant": args.pregnant,
        "smoking_status": args.smoking_status,
        "cigarettes_per_day": args.cigarettes_per_day,
        "years_smoked": args.years_smoked,
        "years_since_quit": args.years_since_quit,
        "conditions": args.condition or [],
    }


def load_profile_rows(csv_path: str | Path) -> list[dict]:
    """Load raw profile fields from a CSV file, one profile per row.

    Blank cells are read as missing values. The conditions column may hold
    several tags separated by semicolons.
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    rows = []
    for record in df.to_dict(orient="records"):
        conditions = record.get("conditions", "")
        record["conditions"] = [
            tag for tag in conditions.split(CSV_CONDITION_SEPARATOR) if tag.strip()
        ]
        rows.append(record)
    logger.info(f"Loaded {len(rows)} profile(s) from {csv_path}")
    return rows


def run_single(fields: dict, as_json: bool = False) -> int:
    """Evaluate one profile and print the result.

    Returns:
        Process exit code.
    """
    try:
        profile = read_profile(fields)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    recommendations = evaluate(profile)

    if as_json:
        print(json.dumps({
            "guideline": config.guideline_label(),
            "count": len(recommendations),
            "recommendations": render_json(recommendations),
        }, indent=2, ensure_ascii=False))
    else:
        print(render_text(recommendations))
    return EXIT_OK


def run_batch(csv_path: str | Path, as_json: bool = False) -> int:
    """Evaluate every profile in a CSV file.

    Rows that fail validation are reported and skipped; the exit code is
    non-zero if any row was invalid.

    Returns:
        Process exit code.
    """
    try:
        rows = load_profile_rows(csv_path)
    except (FileNotFoundError, pd.errors.EmptyDataError) as e:
        logger.error(f"Could not read {csv_path}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    results = {}
    invalid = 0

    for index, fields in enumerate(rows):
        try:
            profile = read_profile(fields)
        except ValueError as e:
            invalid += 1
            logger.warning(f"Row {index}: {e}")
            print(f"Error in row {index}: {e}", file=sys.stderr)
            continue
        results[index] = evaluate(profile)

    if as_json:
        print(json.dumps({
            "guideline": config.guideline_label(),
            "results": {
                str(index): render_json(recs) for index, recs in results.items()
            },
        }, indent=2, ensure_ascii=False))
    else:
        for index, recs in results.items():
            print("=" * 60)
            print(f"PROFILE {index}")
            print("=" * 60)
            print(render_text(recs))
            print()

    if invalid:
        print(f"{invalid} of {len(rows)} row(s) could not be read", file=sys.stderr)
        return EXIT_INVALID_INPUT
    return EXIT_OK


def list_rules() -> int:
    """Print the screening catalog in evaluation order."""
    print(f"{config.guideline_label()} screening rules (evaluation order):")
    for position, rule in enumerate(SCREENING_RULES, start=1):
        print(f"  {position:2d}. {rule.topic} [{rule.rule_id}]")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Preventive Screening Recommendations - USPSTF guideline summaries",
    )

    # Mode selection
    parser.add_argument(
        "--csv",
        type=str,
        help="Evaluate every profile in a CSV file",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List screening rules in evaluation order and exit",
    )

    # Profile fields
    parser.add_argument("--age", type=str, help="Age in years")
    parser.add_argument("--sex", type=str, choices=["male", "female"], help="Sex")
    parser.add_argument(
        "--pregnant",
        action="store_true",
        help="Currently pregnant",
    )
    parser.add_argument(
        "--smoking-status",
        type=str,
        default="never",
        choices=["never", "current", "former"],
        help="Smoking status (default: never)",
    )
    parser.add_argument("--cigarettes-per-day", type=str, help="Cigarettes smoked per day")
    parser.add_argument("--years-smoked", type=str, help="Years smoked")
    parser.add_argument("--years-since-quit", type=str, help="Years since quitting")
    parser.add_argument(
        "--condition",
        action="append",
        help="Risk factor tag (repeatable), e.g. family-history-crc",
    )

    # Options
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=config.use_json_output(),
        help="Print JSON instead of text (default from OUTPUT_FORMAT)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.list_rules:
        return list_rules()
    if args.csv:
        return run_batch(args.csv, as_json=args.json)
    return run_single(fields_from_args(args), as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
