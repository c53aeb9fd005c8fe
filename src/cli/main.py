"""Imageset CLI entry points.

This module exposes commands for converting labeled list files into
embedded key-value stores and inspecting the result. It maps argparse
commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from cli.convert_command import add_convert_command, run_convert_command
from cli.inspect_command import add_inspect_command, run_inspect_command
from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.errors import ImagesetError
from store.imageset_sdk import ImagesetClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="imageset",
        description="Convert labeled list files into leveldb/lmdb stores",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_convert_command(subparsers)
    add_inspect_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Imageset CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = ImagesetClient()
        return _dispatch(parser, client, args)
    except ImagesetError as error:
        print(f"error={error}")
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: ImagesetClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "convert":
        return run_convert_command(client, args)
    if args.command == "inspect":
        return run_inspect_command(client, args)
    if args.command == "run-spec":
        return run_run_spec_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2
