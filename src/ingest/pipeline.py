"""Conversion orchestration for manifest-to-store runs.

This module coordinates manifest loading, optional shuffling, key
encoding, and batched transactional writes into one embedded store.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import ImagesetConfig
from core.constants import COMMIT_BATCH_SIZE
from core.errors import ImagesetConfigError
from core.logging_config import get_logger
from core.types import ConversionResult, ConvertOptions, ManifestRecord
from ingest.key_codec import encode_record
from ingest.manifest_reader import read_manifest
from ingest.order_randomizer import randomize_order
from ingest.progress import ConversionProgressTracker
from store.backend_factory import create_backend
from store.kv_backend import KVBackend

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class WriteTotals:
    """Counters produced by the write loop."""

    record_count: int
    committed_batches: int


class ConversionRunner:
    """Single-use runner converting one manifest into one store."""

    def __init__(self, options: ConvertOptions, config: ImagesetConfig) -> None:
        _validate_options(options)
        self._options = options
        self._config = config
        self._backend = create_backend(options.backend, options.db_name, config)

    def run(self) -> ConversionResult:
        """Execute the conversion and return its summary.

        Raises:
            ImagesetManifestError: If the manifest cannot be read.
            ImagesetBackendOpenError: If the store cannot be created.
            ImagesetBackendWriteError: If a put or commit fails.
            ImagesetKeyCapacityError: If a record key exceeds its buffer.
        """
        records = self._load_records()
        self._backend.open()
        try:
            totals = self._write_records(records)
        finally:
            self._backend.close()
        return ConversionResult(
            db_path=self._options.db_name,
            backend=self._backend.name,
            record_count=totals.record_count,
            committed_batches=totals.committed_batches,
            shuffled=self._options.shuffle,
        )

    def _load_records(self) -> list[ManifestRecord]:
        records = read_manifest(self._options.list_file)
        randomize_order(records, self._options.shuffle, self._config.random_seed)
        _LOGGER.info(
            "manifest_loaded",
            list_file=self._options.list_file,
            root_folder=self._options.root_folder,
            record_count=len(records),
            grayscale=self._options.grayscale,
            resize_width=self._options.resize_width,
            resize_height=self._options.resize_height,
        )
        return records

    def _write_records(self, records: list[ManifestRecord]) -> WriteTotals:
        backend: KVBackend = self._backend
        tracker = ConversionProgressTracker(
            db_path=self._options.db_name,
            backend=backend.name,
            total_records=len(records),
        )
        tracker.log_conversion_started(self._options.shuffle)
        count = 0
        committed_batches = 0
        for index, record in enumerate(records):
            encoded = encode_record(index, record)
            backend.put(encoded.key, encoded.value)
            count += 1
            if count % COMMIT_BATCH_SIZE == 0:
                backend.commit_and_begin_next()
                committed_batches += 1
                tracker.log_batch_committed(count, committed_batches)
        if count % COMMIT_BATCH_SIZE != 0:
            backend.final_commit()
            committed_batches += 1
            tracker.log_batch_committed(count, committed_batches)
        tracker.log_conversion_completed(count, committed_batches)
        return WriteTotals(record_count=count, committed_batches=committed_batches)


def convert_imageset(options: ConvertOptions, config: ImagesetConfig) -> ConversionResult:
    """Convert a manifest into a new key-value store.

    Args:
        options: Conversion options.
        config: Runtime configuration.

    Returns:
        Conversion summary.

    Raises:
        ImagesetConfigError: If options are invalid or the backend is unknown.
        ImagesetManifestError: If the manifest cannot be read.
        ImagesetBackendOpenError: If the target store cannot be created.
        ImagesetBackendWriteError: If a write or commit fails.
    """
    runner = ConversionRunner(options, config)
    return runner.run()


def _validate_options(options: ConvertOptions) -> None:
    """Reject conversion options that cannot describe a valid run."""
    if options.resize_width < 0 or options.resize_height < 0:
        raise ImagesetConfigError(
            "Resize dimensions must be non-negative, got "
            f"{options.resize_width}x{options.resize_height}. Use 0 to keep original size."
        )
    if not options.db_name.strip():
        raise ImagesetConfigError("DB_NAME must be a non-empty path.")
