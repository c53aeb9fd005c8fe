"""Unit tests for backend selection."""

from __future__ import annotations

import pytest

from core.config import ImagesetConfig
from core.errors import ImagesetConfigError
from store.backend_factory import create_backend
from store.leveldb_backend import LevelDBBackend
from store.lmdb_backend import LmdbBackend


def _config() -> ImagesetConfig:
    return ImagesetConfig(random_seed=42, lmdb_map_size=1 << 24)


def test_create_backend_selects_engine_by_name(tmp_path) -> None:
    """Known names map onto their concrete backends in the idle state."""
    leveldb = create_backend("leveldb", str(tmp_path / "a"), _config())
    lmdb = create_backend("lmdb", str(tmp_path / "b"), _config())

    assert (
        isinstance(leveldb, LevelDBBackend)
        and isinstance(lmdb, LmdbBackend)
        and leveldb.state == lmdb.state == "idle"
    )


def test_create_backend_rejects_unknown_engine(tmp_path) -> None:
    """Unknown names raise a configuration error without creating files."""
    with pytest.raises(ImagesetConfigError):
        create_backend("rocksdb", str(tmp_path / "db"), _config())

    assert not (tmp_path / "db").exists()
