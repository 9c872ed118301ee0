"""
Command-line entry point.

Usage:
    join-size instructor teaches
    join-size --no-actual course section
    join-size --workload pairs.yaml --dsn postgresql://localhost/university
"""

import argparse
import logging
import sys
from pathlib import Path

from .base import DEFAULT_SCHEMA, JoinSizeError, get_connection
from .estimator import Catalog, JoinSizeEstimator, Statistics, compare, format_report
from .workload import WorkloadError, load_pairs


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="join-size",
        description="Estimate the size of naturally joining two relations.",
    )
    parser.add_argument(
        "tables",
        nargs="*",
        metavar="TABLE",
        help="The two tables to join (R and S)",
    )
    parser.add_argument(
        "--workload",
        type=Path,
        help="YAML file listing table pairs to compare instead of TABLE TABLE",
    )
    parser.add_argument(
        "--dsn",
        help="PostgreSQL connection string (default: $DATABASE_URL)",
    )
    parser.add_argument(
        "--schema",
        default=DEFAULT_SCHEMA,
        help=f"Schema containing the tables (default: {DEFAULT_SCHEMA})",
    )
    parser.add_argument(
        "--no-actual",
        action="store_true",
        help="Skip executing the real join",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log gathered statistics and case selection to stderr",
    )
    args = parser.parse_args(argv)

    if args.workload is None and len(args.tables) != 2:
        parser.error("exactly 2 table names are required")
    if args.workload is not None and args.tables:
        parser.error("TABLE arguments cannot be combined with --workload")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        pairs = load_pairs(args.workload) if args.workload else [tuple(args.tables)]
    except (OSError, WorkloadError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        conn = get_connection(args.dsn)
    except JoinSizeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        estimator = JoinSizeEstimator(
            Catalog(conn, args.schema), Statistics(conn, args.schema)
        )
        for i, (table1, table2) in enumerate(pairs):
            if i:
                print()
            report = compare(estimator, table1, table2, include_actual=not args.no_actual)
            print(format_report(report))
    except JoinSizeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        conn.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
