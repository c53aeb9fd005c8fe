"""Unit tests for finished-store reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import ImagesetBackendOpenError
from store.kv_reader import summarize_store
from store.lmdb_backend import LmdbBackend


def _build_store(db_path: Path, count: int) -> None:
    backend = LmdbBackend(str(db_path), map_size=1 << 24)
    backend.open()
    for index in range(count):
        backend.put(f"{index:08d}_img".encode(), f"{index:04d}".encode())
    backend.final_commit()
    backend.close()


def test_summarize_store_counts_all_and_samples_leading(tmp_path: Path) -> None:
    """Summary should count every record but keep only the first ``limit``."""
    db_path = tmp_path / "train_lmdb"
    _build_store(db_path, 5)

    summary = summarize_store("lmdb", str(db_path), limit=2)

    assert summary.record_count == 5 and [r.key for r in summary.records] == [
        b"00000000_img",
        b"00000001_img",
    ]


def test_summarize_store_raises_for_missing_store(tmp_path: Path) -> None:
    """Reading a missing store should raise an open error."""
    with pytest.raises(ImagesetBackendOpenError):
        summarize_store("lmdb", str(tmp_path / "missing"), limit=1)

    assert not (tmp_path / "missing").exists()
