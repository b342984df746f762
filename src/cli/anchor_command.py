"""Anchor maintenance command wiring for the time shift CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from shift.anchor_store import parse_anchor_date
from shift.client import TimeShiftClient


def add_set_anchor_command(subparsers: Any) -> None:
    """Register set-anchor subcommand."""
    parser = subparsers.add_parser(
        "set-anchor",
        help="Record the date a directory's documents are currently relative to",
    )
    parser.add_argument("directory", help="Directory receiving the .anchorDate marker")
    parser.add_argument("--date", help="Anchor date as YYYY-MM-DD (default: current UTC date)")


def run_set_anchor_command(client: TimeShiftClient, args: argparse.Namespace) -> int:
    """Write the anchor marker and print its path."""
    anchor_date = parse_anchor_date(args.date, "--date") if args.date else None
    anchor_file = client.set_anchor(Path(args.directory).expanduser(), anchor_date)
    print(anchor_file)
    return 0
