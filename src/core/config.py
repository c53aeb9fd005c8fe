"""Runtime configuration model for Imageset.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_LMDB_MAP_SIZE, DEFAULT_RANDOM_SEED
from core.errors import ImagesetConfigError


@dataclass(frozen=True)
class ImagesetConfig:
    """Validated runtime configuration.

    Attributes:
        random_seed: Seed used for deterministic manifest shuffling.
        lmdb_map_size: Virtual address space reserved by LMDB environments.
    """

    random_seed: int
    lmdb_map_size: int

    @classmethod
    def from_env(cls) -> "ImagesetConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ImagesetConfigError: If environment values are invalid.
        """
        random_seed_value = os.getenv("IMAGESET_RANDOM_SEED", str(DEFAULT_RANDOM_SEED))
        map_size_value = os.getenv("IMAGESET_LMDB_MAP_SIZE", str(DEFAULT_LMDB_MAP_SIZE))
        return cls(
            random_seed=_parse_random_seed(random_seed_value),
            lmdb_map_size=_parse_map_size(map_size_value),
        )


def _parse_random_seed(raw_value: str) -> int:
    """Parse the random seed environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed integer seed.

    Raises:
        ImagesetConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise ImagesetConfigError(
            "Invalid IMAGESET_RANDOM_SEED value: "
            f"expected integer, got '{raw_value}'. "
            "Set IMAGESET_RANDOM_SEED to a numeric value."
        ) from error


def _parse_map_size(raw_value: str) -> int:
    """Parse the LMDB map size environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive map size in bytes.

    Raises:
        ImagesetConfigError: If value is not a positive integer.
    """
    try:
        map_size = int(raw_value)
    except ValueError as error:
        raise ImagesetConfigError(
            "Invalid IMAGESET_LMDB_MAP_SIZE value: "
            f"expected integer byte count, got '{raw_value}'."
        ) from error
    if map_size <= 0:
        raise ImagesetConfigError(
            f"Invalid IMAGESET_LMDB_MAP_SIZE value {map_size}: must be greater than zero."
        )
    return map_size
