"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.constants import SUPPORTED_BACKENDS
from core.errors import ImagesetRunSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a run-spec step."""
    value = optional_string(args, field_name)
    if value is None:
        raise ImagesetRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise ImagesetRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def int_with_default(args: Mapping[str, object], field_name: str, default_value: int) -> int:
    """Read an integer field while preserving explicit zero values."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ImagesetRunSpecError(f"Run-spec field '{field_name}' must be an integer.")


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise ImagesetRunSpecError(f"Run-spec field '{field_name}' must be true/false.")


def parse_backend(args: Mapping[str, object], default_value: str) -> str:
    """Parse an optional backend name from step arguments."""
    value = optional_string(args, "backend")
    if value is None:
        return default_value
    if value in SUPPORTED_BACKENDS:
        return value
    supported_rows = ", ".join(SUPPORTED_BACKENDS)
    raise ImagesetRunSpecError(f"Invalid backend '{value}'. Use one of: {supported_rows}.")
