"""Unit tests for manifest reader module."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from core.errors import ImagesetManifestError
from core.types import ManifestRecord
from ingest.manifest_reader import parse_manifest, read_manifest
from tests.fixture_paths import fixture_path


def test_read_manifest_preserves_file_order() -> None:
    """Reader should return records in source order."""
    records = read_manifest(str(fixture_path("manifests/two_records.txt")))

    assert records == [
        ManifestRecord(path="a/img1.JPEG", label=3),
        ManifestRecord(path="a/img2.JPEG", label=7),
    ]


def test_read_manifest_stops_at_first_malformed_label() -> None:
    """A non-integer label should end the manifest without raising."""
    records = read_manifest(str(fixture_path("manifests/malformed_tail.txt")))

    assert [record.path for record in records] == ["cat/001.jpg", "cat/002.jpg", "dog/001.jpg"]


def test_read_manifest_empty_file_yields_no_records() -> None:
    """An empty manifest is valid and produces no records."""
    records = read_manifest(str(fixture_path("manifests/empty.txt")))

    assert records == []


def test_read_manifest_raises_for_missing_file(tmp_path: Path) -> None:
    """Reader should fail when the list file does not exist."""
    missing_path = tmp_path / "missing.txt"

    with pytest.raises(ImagesetManifestError):
        read_manifest(str(missing_path))

    assert missing_path.exists() is False


def test_parse_manifest_drops_pair_missing_label() -> None:
    """A trailing path without a label should be ignored."""
    records = parse_manifest(io.StringIO("a.jpg 1\nb.jpg\n"))

    assert records == [ManifestRecord(path="a.jpg", label=1)]


def test_parse_manifest_reads_tokens_across_whitespace() -> None:
    """Tokens are paired regardless of tabs, blank lines, or line breaks."""
    records = parse_manifest(io.StringIO("a.jpg\t4\n\n  b.jpg\n12 c.jpg -1\n"))

    assert records == [
        ManifestRecord(path="a.jpg", label=4),
        ManifestRecord(path="b.jpg", label=12),
        ManifestRecord(path="c.jpg", label=-1),
    ]


def test_read_manifest_keeps_non_utf8_path_bytes(tmp_path: Path) -> None:
    """Latin-1 path bytes should load instead of failing to decode."""
    manifest = tmp_path / "list.txt"
    manifest.write_bytes(b"caf\xe9/img1.jpg 3\nok/img2.jpg 7\n")

    records = read_manifest(str(manifest))

    assert [record.label for record in records] == [3, 7] and records[0].path.encode(
        "utf-8", "surrogateescape"
    ) == b"caf\xe9/img1.jpg"


def test_parse_manifest_label_stops_at_first_non_digit() -> None:
    """Characters after a label's digits start the next path token."""
    records = parse_manifest(io.StringIO("a.jpg 7x b.jpg 2"))

    assert records == [ManifestRecord(path="a.jpg", label=7)]


def test_parse_manifest_label_remainder_becomes_next_path() -> None:
    """An underscore after the digits is not part of the label."""
    records = parse_manifest(io.StringIO("a.jpg 1_000 2"))

    assert records == [
        ManifestRecord(path="a.jpg", label=1),
        ManifestRecord(path="_000", label=2),
    ]


@pytest.mark.parametrize("raw_label", ["٣", "2147483648", "+", "-x"])
def test_parse_manifest_rejects_labels_outside_ascii_int32(raw_label: str) -> None:
    """Non-ASCII digits, 32-bit overflow, and bare signs end the manifest."""
    records = parse_manifest(io.StringIO(f"a.jpg 1\nb.jpg {raw_label}\n"))

    assert records == [ManifestRecord(path="a.jpg", label=1)]
