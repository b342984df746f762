"""Explicit shift command wiring for the time shift CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from core.constants import DEFAULT_SHIFT_UNIT, SUPPORTED_SHIFT_UNITS
from core.types import ShiftPlan
from shift.client import TimeShiftClient
from transforms.temporal_codec import normalize_unit


def add_shift_command(subparsers: Any) -> None:
    """Register shift subcommand."""
    parser = subparsers.add_parser(
        "shift",
        help="Shift all documents under a directory by a fixed amount, ignoring anchors",
    )
    parser.add_argument("input_dir", help="Directory containing FHIR JSON documents")
    parser.add_argument("--output-dir", help="Output directory (default: overwrite input files)")
    parser.add_argument(
        "--amount",
        type=int,
        required=True,
        help="Signed number of units to shift by",
    )
    parser.add_argument(
        "--unit",
        default=DEFAULT_SHIFT_UNIT,
        help=f"Shift unit, singular or plural: {', '.join(SUPPORTED_SHIFT_UNITS)}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every shifted value")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the values that would change without writing files",
    )


def run_shift_command(client: TimeShiftClient, args: argparse.Namespace) -> int:
    """Execute an explicit shift and print per-file counts."""
    plan = ShiftPlan(amount=args.amount, unit=normalize_unit(args.unit))
    output_dir = Path(args.output_dir).expanduser() if args.output_dir else None
    result = client.shift(
        Path(args.input_dir).expanduser(),
        plan,
        output_dir=output_dir,
        verbose=args.verbose,
        dry_run=args.dry_run,
    )
    for file_result in result.files:
        print(f"{file_result.source_path}\t{file_result.values_shifted}")
        if args.dry_run:
            for change in file_result.changes:
                print(f"  {change.path}: {change.old_value} => {change.new_value}")
    print(f"files_processed={result.file_count}")
    print(f"values_shifted={result.values_shifted}")
    return 0
