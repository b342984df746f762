"""Temporal path listing command for the time shift CLI."""

from __future__ import annotations

import argparse
from typing import Any

from shift.client import TimeShiftClient


def add_paths_command(subparsers: Any) -> None:
    """Register paths subcommand."""
    parser = subparsers.add_parser("paths", help="List registered temporal paths")
    parser.add_argument("resource_type", nargs="?", help="Only list paths of this resource type")


def run_paths_command(client: TimeShiftClient, args: argparse.Namespace) -> int:
    """Print one ``ResourceType<TAB>path`` row per registered path."""
    registry = client.registry
    resource_types = [args.resource_type] if args.resource_type else registry.resource_types()
    for resource_type in resource_types:
        for path in registry.raw_paths(resource_type):
            print(f"{resource_type}\t{path}")
    return 0
