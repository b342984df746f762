"""Time shift CLI entry points.
This module exposes commands for anchor walks, explicit shifts, and
anchor maintenance. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from cli.anchor_command import add_set_anchor_command, run_set_anchor_command
from cli.paths_command import add_paths_command, run_paths_command
from cli.run_command import add_run_command, run_run_command
from cli.shift_command import add_shift_command, run_shift_command
from core.config import TimeShiftConfig, parse_worker_count
from core.errors import TimeShiftError
from shift.client import TimeShiftClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="fhir-timeshift",
        description="Shift dates in FHIR JSON documents while preserving their intervals",
    )
    parser.add_argument("--data-dir", help="Override TIMESHIFT_DATA_DIR for this command")
    parser.add_argument("--paths-file", help="Override TIMESHIFT_PATHS_FILE for this command")
    parser.add_argument("--workers", help="Override TIMESHIFT_WORKERS for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_run_command(subparsers)
    add_shift_command(subparsers)
    add_set_anchor_command(subparsers)
    add_paths_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the time shift CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code: 0 on success, 1 for an anchor walk that shifted
        nothing, 2 for failures.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args)
        if args.command == "run":
            return run_run_command(client, args)
        if args.command == "shift":
            return run_shift_command(client, args)
        if args.command == "set-anchor":
            return run_set_anchor_command(client, args)
        if args.command == "paths":
            return run_paths_command(client, args)
    except TimeShiftError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> TimeShiftClient:
    """Build SDK client with optional overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = TimeShiftConfig.from_env()
    if args.data_dir:
        config = replace(config, data_dir=Path(args.data_dir).expanduser().resolve())
    if args.paths_file:
        config = replace(config, paths_file=Path(args.paths_file).expanduser().resolve())
    if args.workers:
        config = replace(config, workers=parse_worker_count(args.workers))
    return TimeShiftClient(config)
