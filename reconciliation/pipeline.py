#!/usr/bin/env python3
"""
Reconciliation Pipeline

Command line entry point for the three reconciliation operations.

Operations:
1. consolidate - Map spelling variants of entity names to one canonical form
2. categorize  - Label entities with categories described in natural language
3. match       - Match entities against a reference list of entities of interest

Input files hold one entity per line (blank lines are skipped). A .csv input is
read from the column given with --column (first column by default).

Usage:
  # Consolidate organisation names with OpenAI
  python3 -m reconciliation.pipeline consolidate companies.txt --output consolidated.csv

  # Categorize with examples, using a Groq model
  python3 -m reconciliation.pipeline categorize shapes.txt \
      --description "Categorize the entities as color or shape." \
      --examples examples.csv --model groq/llama-3.3-70b-versatile

  # Fuzzy match against a reference list, markdown output
  python3 -m reconciliation.pipeline match dataset.txt of_interest.txt --format markdown

Environment Variables:
- OPENAI_API_KEY: OpenAI API key (required for OpenAI models)
- GROQ_API_KEY: Groq API key (required for Groq models)
- OPENROUTER_API_KEY: OpenRouter API key (required for OpenRouter models)
- RECONCILIATION_MODEL, RECONCILIATION_SEED, RECONCILIATION_TIMEOUT,
  RECONCILIATION_RETRIES: defaults for the matching options
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from reconciliation.config import ReconciliationConfig
from reconciliation.exceptions import ReconciliationError
from reconciliation.preprocessors import NameCleaner
from reconciliation.steps.d_orchestration import ResultTable, run_operation
from reconciliation.steps.e_result_output import FORMATS, format_table, save_table
from reconciliation.strategies.operations import (
    BaseOperation,
    CategorizationOperation,
    ConsolidationOperation,
    FuzzyMatchingOperation,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def load_entities(path: Path, column: Optional[str] = None) -> List[str]:
    """
    Load entities from a text file (one per line) or a CSV column.

    Args:
        path: Input file
        column: CSV column name (first column if omitted)

    Returns:
        Entities in file order
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        if path.suffix.lower() != ".csv":
            return [line.strip() for line in f if line.strip()]

        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return []
        index = 0
        if column is not None:
            if column not in header:
                raise ValueError(f"Column {column!r} not found in {path} (columns: {header})")
            index = header.index(column)
        return [row[index].strip() for row in reader if len(row) > index and row[index].strip()]


def load_examples(path: Path) -> List[Tuple[str, str]]:
    """Load (entity, label) examples from a two-column CSV file with a header row."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        examples = []
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) < 2:
                raise ValueError(f"{path}:{line_no}: expected entity and label columns")
            examples.append((row[0].strip(), row[1].strip()))
        return examples


def clean_entities(entities: List[str]) -> List[str]:
    """Clean organisation names, dropping entries that clean to nothing."""
    cleaner = NameCleaner()
    cleaned = []
    for result in (cleaner.process(entity) for entity in entities):
        if result.success:
            cleaned.append(result.value)
        else:
            logger.warning(f"Dropping {result.original!r}: {result.error}")
    return cleaned


def build_operation(args: argparse.Namespace, budget: Optional[int]) -> BaseOperation:
    """Create the operation selected on the command line."""
    if args.command == "consolidate":
        return ConsolidationOperation(budget=budget)

    elif args.command == "categorize":
        description = args.description
        if args.description_file:
            description = Path(args.description_file).read_text(encoding="utf-8")
        if not description:
            raise ValueError("categorize needs --description or --description-file")
        examples = load_examples(Path(args.examples)) if args.examples else None
        return CategorizationOperation(description, examples=examples, budget=budget)

    elif args.command == "match":
        reference = load_entities(Path(args.reference), args.reference_column)
        return FuzzyMatchingOperation(reference, budget=budget)

    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Consolidate, categorize or fuzzy-match entity lists with an LLM"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", help="Entity file (one per line, or .csv)")
    common.add_argument("--column", help="Column to read from a .csv input")
    common.add_argument(
        "--model",
        default=None,
        help="Model, optionally as provider/model (default: gpt-4o)",
    )
    common.add_argument("--seed", type=int, default=None, help="Seed for reduced variance")
    common.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    common.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Extra attempts per chunk on transport errors (default: 0)",
    )
    common.add_argument("--budget", type=int, default=None, help="Characters per chunk")
    common.add_argument(
        "--clean-names",
        action="store_true",
        help="Normalise organisation names before submitting them",
    )
    common.add_argument(
        "--lenient-coverage",
        action="store_true",
        help="Warn instead of failing when a reply does not cover its chunk",
    )
    common.add_argument("--format", choices=FORMATS, default=None, help="Output format")
    common.add_argument("--output", help="Write the table to this file instead of stdout")
    common.add_argument("--max-width", type=int, default=80, help="Markdown table width")
    common.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "consolidate", parents=[common], help="Consolidate spelling variants"
    )

    categorize = subparsers.add_parser(
        "categorize", parents=[common], help="Label entities with categories"
    )
    categorize.add_argument("--description", help="Description of the categories")
    categorize.add_argument("--description-file", help="File holding the description")
    categorize.add_argument("--examples", help="CSV of entity,label examples")

    match = subparsers.add_parser(
        "match", parents=[common], help="Match entities against a reference list"
    )
    match.add_argument("reference", help="Reference file of entities of interest")
    match.add_argument("--reference-column", help="Column to read from a .csv reference")

    return parser


def emit(table: ResultTable, args: argparse.Namespace) -> None:
    """Write the result table to the requested file or to stdout."""
    if args.output:
        path = save_table(table, Path(args.output), args.format, max_width=args.max_width)
        print(f"💾 Saved {len(table)} rows to: {path}")
    else:
        sys.stdout.write(format_table(table, args.format or "csv", max_width=args.max_width))


def main(argv: Optional[List[str]] = None) -> int:
    """Main pipeline entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = ReconciliationConfig.from_env(
            model=args.model,
            seed=args.seed,
            timeout=args.timeout,
            retries=args.retries,
            budget=args.budget,
            strict_coverage=not args.lenient_coverage,
            verbose=args.verbose,
        )
        entities = load_entities(Path(args.input), args.column)
        if args.clean_names:
            entities = clean_entities(entities)
        operation = build_operation(args, config.budget)
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f"🚀 {operation.name} of {len(entities)} entities", file=sys.stderr)
    print(f"🤖 Model: {config.model}", file=sys.stderr)

    try:
        table = run_operation(
            operation,
            entities,
            api_key=config.api_key,
            model=config.model,
            seed=config.seed,
            retry=config.retry,
            timeout=config.timeout,
            strict_coverage=config.strict_coverage,
        )
    except ReconciliationError as e:
        print(f"❌ {e}", file=sys.stderr)
        if e.raw_response is not None:
            print("Last API response:", file=sys.stderr)
            print(json.dumps(e.raw_response, indent=2, default=str), file=sys.stderr)
        return 1
    except (RuntimeError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    emit(table, args)
    print(f"✅ {operation.name} completed: {len(table)} rows", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
