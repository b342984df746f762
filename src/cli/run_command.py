"""Anchor walk command wiring for the time shift CLI."""

from __future__ import annotations

import argparse
from typing import Any

from shift.anchor_store import parse_anchor_date
from shift.client import TimeShiftClient


def add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser(
        "run",
        help="Shift every directory under the data directory that has a due anchor date",
    )
    parser.add_argument("--today", help="Reference date as YYYY-MM-DD (default: current UTC date)")
    parser.add_argument("--verbose", action="store_true", help="Log every shifted value")


def run_run_command(client: TimeShiftClient, args: argparse.Namespace) -> int:
    """Execute the anchor walk and print run totals.

    Returns 1 when no directory was shifted so piped commands can detect
    a no-op run.
    """
    today = parse_anchor_date(args.today, "--today") if args.today else None
    summary = client.run_anchor_walk(today=today, verbose=args.verbose)
    print(f"directories_shifted={summary.directories_shifted}")
    print(f"directories_skipped={len(summary.skipped_directories)}")
    print(f"files_processed={summary.files_processed}")
    print(f"values_shifted={summary.values_shifted}")
    print(f"elapsed_seconds={summary.elapsed_seconds:.0f}")
    if summary.directories_shifted == 0:
        print("No directories needed a time shift.")
        return 1
    return 0
