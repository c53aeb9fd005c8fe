"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative conversion path without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from core.constants import DEFAULT_BACKEND, DEFAULT_INSPECT_LIMIT
from core.errors import ImagesetRunSpecError
from core.run_spec import RunSpec, RunSpecDefaults, RunSpecStep, load_run_spec
from core.run_spec_fields import (
    int_with_default,
    optional_bool,
    parse_backend,
    required_string,
)
from core.types import ConversionResult, ConvertOptions, StoreSummary


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def convert(self, options: ConvertOptions) -> ConversionResult: ...

    def inspect(self, db_name: str, backend: str, limit: int) -> StoreSummary: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    defaults: RunSpecDefaults


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    context = RunSpecExecutionContext(client=client, defaults=spec.defaults)
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def format_conversion_result(result: ConversionResult) -> tuple[str, ...]:
    """Render a conversion summary as ``key=value`` lines."""
    return (
        f"db_path={result.db_path}",
        f"backend={result.backend}",
        f"record_count={result.record_count}",
        f"committed_batches={result.committed_batches}",
    )


def format_store_summary(summary: StoreSummary) -> tuple[str, ...]:
    """Render sample rows as ``key<TAB>value`` plus a record count line."""
    rows = [
        f"{record.key.decode('utf-8', 'replace')}\t{record.value.decode('utf-8', 'replace')}"
        for record in summary.records
    ]
    rows.append(f"record_count={summary.record_count}")
    return tuple(rows)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "convert":
        return _execute_convert_step(context, step)
    if step.command == "inspect":
        return _execute_inspect_step(context, step)
    raise ImagesetRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_convert_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    _validate_step_keys(step, _CONVERT_KEYS)
    default_shuffle = bool(context.defaults.shuffle)
    options = ConvertOptions(
        root_folder=required_string(step.args, "root_folder"),
        list_file=required_string(step.args, "list_file"),
        db_name=required_string(step.args, "db_name"),
        shuffle=optional_bool(step.args, "shuffle", default_value=default_shuffle),
        backend=parse_backend(step.args, _default_backend(context)),
        resize_width=int_with_default(step.args, "resize_width", 0),
        resize_height=int_with_default(step.args, "resize_height", 0),
        grayscale=optional_bool(step.args, "gray", default_value=False),
    )
    return format_conversion_result(context.client.convert(options))


def _execute_inspect_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    _validate_step_keys(step, _INSPECT_KEYS)
    summary = context.client.inspect(
        required_string(step.args, "db_name"),
        parse_backend(step.args, _default_backend(context)),
        int_with_default(step.args, "limit", DEFAULT_INSPECT_LIMIT),
    )
    return format_store_summary(summary)


def _default_backend(context: RunSpecExecutionContext) -> str:
    return context.defaults.backend or DEFAULT_BACKEND


def _validate_step_keys(step: RunSpecStep, allowed_keys: frozenset[str]) -> None:
    unknown_keys = sorted(set(step.args) - allowed_keys)
    if unknown_keys:
        raise ImagesetRunSpecError(
            f"Run-spec command '{step.command}' has unknown fields: {', '.join(unknown_keys)}."
        )


_CONVERT_KEYS = frozenset(
    {
        "root_folder",
        "list_file",
        "db_name",
        "shuffle",
        "backend",
        "resize_width",
        "resize_height",
        "gray",
    }
)
_INSPECT_KEYS = frozenset({"db_name", "backend", "limit"})
