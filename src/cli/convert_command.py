"""Convert command wiring for Imageset CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.constants import DEFAULT_BACKEND, SUPPORTED_BACKENDS
from core.run_spec_execution import format_conversion_result
from core.types import ConvertOptions
from store.imageset_sdk import ImagesetClient


def add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser(
        "convert",
        help="Convert a labeled list file into a new leveldb/lmdb store",
        description=(
            "Convert a list of 'path label' records into key-value records. "
            "Keys are '<8-digit index>_<path without extension>', values the 4-digit label."
        ),
    )
    parser.add_argument("root_folder", help="Root folder that holds the listed items")
    parser.add_argument("list_file", help="List file with one 'path label' record per line")
    parser.add_argument("db_name", help="Target store path; must not exist yet")
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Randomly shuffle the order of items and their labels",
    )
    parser.add_argument(
        "--gray",
        action="store_true",
        help="Treat images as single-channel grayscale ones",
    )
    parser.add_argument(
        "--backend",
        default=DEFAULT_BACKEND,
        choices=SUPPORTED_BACKENDS,
        help="The backend for storing the result",
    )
    parser.add_argument("--resize-width", type=int, default=0, help="Width items are resized to")
    parser.add_argument(
        "--resize-height", type=int, default=0, help="Height items are resized to"
    )


def run_convert_command(client: ImagesetClient, args: argparse.Namespace) -> int:
    """Handle convert command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = ConvertOptions(
        root_folder=args.root_folder,
        list_file=args.list_file,
        db_name=args.db_name,
        shuffle=args.shuffle,
        backend=args.backend,
        resize_width=args.resize_width,
        resize_height=args.resize_height,
        grayscale=args.gray,
    )
    result = client.convert(options)
    for line in format_conversion_result(result):
        print(line)
    return 0
