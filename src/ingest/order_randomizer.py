"""Manifest order randomization.

This module applies one seeded uniform permutation to a manifest
before any record key is synthesized.
"""

from __future__ import annotations

import random

from core.logging_config import get_logger
from core.types import ManifestRecord

_LOGGER = get_logger(__name__)


def randomize_order(records: list[ManifestRecord], enabled: bool, seed: int) -> None:
    """Shuffle manifest records in place when enabled.

    Args:
        records: Full ordered manifest.
        enabled: Whether to permute the records.
        seed: Random seed for reproducible permutations.
    """
    if not enabled:
        return
    rng = random.Random(seed)
    rng.shuffle(records)
    _LOGGER.info("manifest_shuffled", record_count=len(records), seed=seed)
