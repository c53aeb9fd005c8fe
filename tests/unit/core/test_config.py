"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import ImagesetConfig
from core.constants import DEFAULT_LMDB_MAP_SIZE
from core.errors import ImagesetConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the default seed and 1 TiB map size."""
    monkeypatch.delenv("IMAGESET_RANDOM_SEED", raising=False)
    monkeypatch.delenv("IMAGESET_LMDB_MAP_SIZE", raising=False)

    config = ImagesetConfig.from_env()

    assert config.random_seed == 42 and config.lmdb_map_size == DEFAULT_LMDB_MAP_SIZE


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read seed and map size from environment."""
    monkeypatch.setenv("IMAGESET_RANDOM_SEED", "7")
    monkeypatch.setenv("IMAGESET_LMDB_MAP_SIZE", "1048576")

    config = ImagesetConfig.from_env()

    assert config.random_seed == 7 and config.lmdb_map_size == 1048576


def test_from_env_raises_for_invalid_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric random seed."""
    monkeypatch.setenv("IMAGESET_RANDOM_SEED", "not-a-number")

    with pytest.raises(ImagesetConfigError):
        ImagesetConfig.from_env()

    assert os.getenv("IMAGESET_RANDOM_SEED") == "not-a-number"


def test_from_env_raises_for_non_positive_map_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject a zero LMDB map size."""
    monkeypatch.setenv("IMAGESET_LMDB_MAP_SIZE", "0")

    with pytest.raises(ImagesetConfigError):
        ImagesetConfig.from_env()

    assert True
