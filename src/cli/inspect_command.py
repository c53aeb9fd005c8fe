"""Inspect command wiring for Imageset CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.constants import DEFAULT_BACKEND, DEFAULT_INSPECT_LIMIT, SUPPORTED_BACKENDS
from core.run_spec_execution import format_store_summary
from store.imageset_sdk import ImagesetClient


def add_inspect_command(subparsers: Any) -> None:
    """Register inspect subcommand."""
    parser = subparsers.add_parser("inspect", help="Print leading records of a converted store")
    parser.add_argument("db_name", help="Store path")
    parser.add_argument(
        "--backend",
        default=DEFAULT_BACKEND,
        choices=SUPPORTED_BACKENDS,
        help="The backend the store was written with",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_INSPECT_LIMIT,
        help="Number of leading records to print",
    )


def run_inspect_command(client: ImagesetClient, args: argparse.Namespace) -> int:
    """Print sample records and the total record count."""
    summary = client.inspect(args.db_name, args.backend, args.limit)
    for line in format_store_summary(summary):
        print(line)
    return 0
