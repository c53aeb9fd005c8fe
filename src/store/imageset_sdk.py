"""Python SDK for conversion operations.

This module exposes high-level APIs for converting manifests into
stores, inspecting finished stores, and running YAML run-specs.
"""

from __future__ import annotations

from core.config import ImagesetConfig
from core.run_spec_execution import execute_run_spec_file
from core.types import ConversionResult, ConvertOptions, StoredRecord, StoreSummary
from ingest.pipeline import convert_imageset
from store.kv_reader import read_store_records, summarize_store


class ImagesetClient:
    """Primary SDK entry point for conversion workflows."""

    def __init__(self, config: ImagesetConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ImagesetConfig.from_env()

    def convert(self, options: ConvertOptions) -> ConversionResult:
        """Convert a manifest into a new key-value store.

        Args:
            options: Conversion options.

        Returns:
            Conversion summary.

        Raises:
            ImagesetError: If any stage of the conversion fails.
        """
        return convert_imageset(options, self._config)

    def inspect(self, db_name: str, backend: str, limit: int) -> StoreSummary:
        """Count records in a store and sample the first ``limit`` of them."""
        return summarize_store(backend, db_name, limit)

    def records(self, db_name: str, backend: str) -> list[StoredRecord]:
        """Load every record of a store in key order."""
        return read_store_records(backend, db_name)

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec file and return printable output lines."""
        return execute_run_spec_file(self, spec_file)
