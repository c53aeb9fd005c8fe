"""Integration tests for manifest-to-store conversion."""

from __future__ import annotations

import importlib.util
import math
from pathlib import Path

import pytest

from core.config import ImagesetConfig
from core.errors import ImagesetBackendOpenError, ImagesetKeyCapacityError
from core.types import ConvertOptions
from ingest.key_codec import decode_label
from store.imageset_sdk import ImagesetClient
from tests.fixture_paths import fixture_path


def _client() -> ImagesetClient:
    return ImagesetClient(ImagesetConfig(random_seed=42, lmdb_map_size=1 << 26))


def _write_manifest(path: Path, count: int) -> Path:
    lines = [f"n{index % 7:02d}/img{index:06d}.JPEG {index % 7}" for index in range(count)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _backends() -> list[str]:
    if importlib.util.find_spec("plyvel") is None:
        return ["lmdb"]
    return ["lmdb", "leveldb"]


@pytest.mark.parametrize("backend", _backends())
def test_two_record_manifest_roundtrips_after_reopen(tmp_path: Path, backend: str) -> None:
    """Both records should be retrievable with their keys and padded labels."""
    db_path = tmp_path / f"train_{backend}"
    client = _client()
    options = ConvertOptions(
        root_folder="data/",
        list_file=str(fixture_path("manifests/two_records.txt")),
        db_name=str(db_path),
        backend=backend,
    )

    result = client.convert(options)
    records = client.records(str(db_path), backend)

    assert result.record_count == 2 and [(r.key, r.value) for r in records] == [
        (b"00000000_a/img1", b"0003"),
        (b"00000001_a/img2", b"0007"),
    ]


@pytest.mark.parametrize("backend", _backends())
def test_existing_target_aborts_before_writing(tmp_path: Path, backend: str) -> None:
    """An existing target path should abort the run and leave it untouched."""
    db_path = tmp_path / "existing"
    db_path.mkdir()
    options = ConvertOptions(
        root_folder="data/",
        list_file=str(fixture_path("manifests/two_records.txt")),
        db_name=str(db_path),
        backend=backend,
    )

    with pytest.raises(ImagesetBackendOpenError):
        _client().convert(options)

    assert list(db_path.iterdir()) == []


def test_empty_manifest_creates_empty_store(tmp_path: Path) -> None:
    """An empty manifest still creates the store, with no records or commits."""
    db_path = tmp_path / "train_lmdb"
    client = _client()
    options = ConvertOptions(
        root_folder="data/",
        list_file=str(fixture_path("manifests/empty.txt")),
        db_name=str(db_path),
    )

    result = client.convert(options)

    assert (
        result.committed_batches == 0
        and db_path.is_dir()
        and client.records(str(db_path), "lmdb") == []
    )


def test_large_manifest_keys_are_sorted_and_labels_decode(tmp_path: Path) -> None:
    """Stored keys should equal the expected set, in increasing order."""
    count = 2345
    manifest = _write_manifest(tmp_path / "list.txt", count)
    db_path = tmp_path / "train_lmdb"
    client = _client()

    result = client.convert(
        ConvertOptions(root_folder="data/", list_file=str(manifest), db_name=str(db_path))
    )
    records = client.records(str(db_path), "lmdb")
    expected_keys = [f"{i:08d}_n{i % 7:02d}/img{i:06d}".encode() for i in range(count)]

    assert (
        [record.key for record in records] == expected_keys
        and [decode_label(record.value) for record in records] == [i % 7 for i in range(count)]
        and result.committed_batches == math.ceil(count / 1000)
    )


def test_shuffled_conversion_keeps_path_set(tmp_path: Path) -> None:
    """Shuffle permutes index assignment but stores every path once."""
    count = 300
    manifest = _write_manifest(tmp_path / "list.txt", count)
    db_path = tmp_path / "train_lmdb"
    client = _client()

    client.convert(
        ConvertOptions(
            root_folder="data/",
            list_file=str(manifest),
            db_name=str(db_path),
            shuffle=True,
        )
    )
    keys = [record.key.decode() for record in client.records(str(db_path), "lmdb")]
    stored_paths = [key.split("_", 1)[1] for key in keys]
    original_paths = [f"n{i % 7:02d}/img{i:06d}" for i in range(count)]

    assert (
        [key.split("_", 1)[0] for key in keys] == [f"{i:08d}" for i in range(count)]
        and sorted(stored_paths) == sorted(original_paths)
        and stored_paths != original_paths
    )


@pytest.mark.parametrize("backend", _backends())
def test_failure_mid_run_keeps_committed_batches(tmp_path: Path, backend: str) -> None:
    """Records committed before a failing record stay readable; the open batch is lost."""
    manifest = _write_manifest(tmp_path / "list.txt", 1200)
    with manifest.open("a", encoding="utf-8") as stream:
        stream.write("x" * 300 + ".JPEG 1\n")
    db_path = tmp_path / f"train_{backend}"
    client = _client()

    with pytest.raises(ImagesetKeyCapacityError):
        client.convert(
            ConvertOptions(
                root_folder="data/",
                list_file=str(manifest),
                db_name=str(db_path),
                backend=backend,
            )
        )
    records = client.records(str(db_path), backend)

    assert len(records) == 1000 and records[-1].key == b"00000999_n05/img000999"
