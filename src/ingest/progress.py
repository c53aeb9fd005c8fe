"""Structured conversion progress reporting.

This module emits cumulative progress events at each batch commit
and a completion summary with elapsed time and throughput.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass
class ConversionProgressTracker:
    """Track and emit conversion progress events for one run."""

    db_path: str
    backend: str
    total_records: int
    run_started_at: float = field(default_factory=time.monotonic)

    def log_conversion_started(self, shuffled: bool) -> None:
        """Log one event when the write loop starts."""
        _LOGGER.info(
            "conversion_started",
            db_path=self.db_path,
            backend=self.backend,
            total_records=self.total_records,
            shuffled=shuffled,
        )

    def log_batch_committed(self, processed_count: int, committed_batches: int) -> None:
        """Log cumulative processed count after a batch commit."""
        _LOGGER.info(
            "conversion_progress",
            db_path=self.db_path,
            processed=processed_count,
            total_records=self.total_records,
            committed_batches=committed_batches,
            progress=round(_progress_fraction(processed_count, self.total_records), 3),
        )

    def log_conversion_completed(self, processed_count: int, committed_batches: int) -> None:
        """Log completion summary with elapsed time and throughput."""
        elapsed_seconds = max(0.0, time.monotonic() - self.run_started_at)
        _LOGGER.info(
            "conversion_completed",
            db_path=self.db_path,
            backend=self.backend,
            processed=processed_count,
            committed_batches=committed_batches,
            elapsed_seconds=round(elapsed_seconds, 3),
            records_per_second=round(_throughput(processed_count, elapsed_seconds), 1),
        )


def _progress_fraction(processed_count: int, total_records: int) -> float:
    """Compute bounded run progress fraction."""
    if total_records <= 0:
        return 1.0
    return min(1.0, max(0.0, processed_count / total_records))


def _throughput(processed_count: int, elapsed_seconds: float) -> float:
    if elapsed_seconds <= 0.0:
        return 0.0
    return processed_count / elapsed_seconds
