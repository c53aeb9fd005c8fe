"""Shared typed models.

This module defines immutable data models used by ingest, store,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import DEFAULT_BACKEND


@dataclass(frozen=True)
class ManifestRecord:
    """One parsed manifest entry.

    Attributes:
        path: Item path relative to the root folder.
        label: Integer class label.
    """

    path: str
    label: int


@dataclass(frozen=True)
class EncodedRecord:
    """Key-value pair ready for a single store write.

    Attributes:
        key: Index-prefixed, lexicographically sortable record key.
        value: Zero-padded label payload.
    """

    key: bytes
    value: bytes


@dataclass(frozen=True)
class StoredRecord:
    """Key-value pair read back from a finished store."""

    key: bytes
    value: bytes


@dataclass(frozen=True)
class ConvertOptions:
    """Conversion command options.

    Attributes:
        root_folder: Folder holding the manifest items.
        list_file: Manifest file with ``path label`` records.
        db_name: Target store path; must not exist yet.
        shuffle: Randomly permute manifest order before writing.
        backend: Storage engine name, ``leveldb`` or ``lmdb``.
        resize_width: Width items are resized to, ``0`` keeps the original.
        resize_height: Height items are resized to, ``0`` keeps the original.
        grayscale: Treat items as single-channel images.
    """

    root_folder: str
    list_file: str
    db_name: str
    shuffle: bool = False
    backend: str = DEFAULT_BACKEND
    resize_width: int = 0
    resize_height: int = 0
    grayscale: bool = False


@dataclass(frozen=True)
class ConversionResult:
    """Summary of one completed conversion run.

    Attributes:
        db_path: Store path that was written.
        backend: Storage engine name used.
        record_count: Number of records written.
        committed_batches: Number of commits issued.
        shuffled: Whether manifest order was randomized.
    """

    db_path: str
    backend: str
    record_count: int
    committed_batches: int
    shuffled: bool


@dataclass(frozen=True)
class StoreSummary:
    """Record count plus a leading sample of records from one store.

    Attributes:
        db_path: Store path that was read.
        backend: Storage engine name.
        record_count: Total number of records in the store.
        records: First records in key order.
    """

    db_path: str
    backend: str
    record_count: int
    records: tuple[StoredRecord, ...]
