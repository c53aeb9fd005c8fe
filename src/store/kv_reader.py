"""Read access to finished stores.

This module reopens a converted store read-only and walks its records
in key order, which equals conversion order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from core.constants import LEVELDB_BACKEND, LMDB_BACKEND
from core.errors import ImagesetBackendOpenError
from core.types import StoredRecord, StoreSummary
from store.backend_factory import validate_backend_name
from store.leveldb_backend import import_plyvel
from store.lmdb_backend import import_lmdb


def read_store_records(backend_name: str, db_path: str) -> list[StoredRecord]:
    """Load every record from a store in key order.

    Args:
        backend_name: Engine name used to write the store.
        db_path: Store path.

    Returns:
        Stored records in iteration order.

    Raises:
        ImagesetBackendOpenError: If the store is missing or unreadable.
    """
    return list(_iter_records(validate_backend_name(backend_name), db_path))


def summarize_store(backend_name: str, db_path: str, limit: int) -> StoreSummary:
    """Count store records and keep the first ``limit`` of them.

    Args:
        backend_name: Engine name used to write the store.
        db_path: Store path.
        limit: Maximum number of sample records to keep.

    Returns:
        Store summary.
    """
    backend = validate_backend_name(backend_name)
    sample: list[StoredRecord] = []
    record_count = 0
    for record in _iter_records(backend, db_path):
        if record_count < limit:
            sample.append(record)
        record_count += 1
    return StoreSummary(
        db_path=db_path,
        backend=backend,
        record_count=record_count,
        records=tuple(sample),
    )


def _iter_records(backend_name: str, db_path: str) -> Iterator[StoredRecord]:
    if not Path(db_path).exists():
        raise ImagesetBackendOpenError(
            f"Failed to open {backend_name} store {db_path}: path does not exist."
        )
    if backend_name == LEVELDB_BACKEND:
        return _iter_leveldb_records(db_path)
    if backend_name == LMDB_BACKEND:
        return _iter_lmdb_records(db_path)
    raise ImagesetBackendOpenError(f"Unsupported backend '{backend_name}'.")


def _iter_leveldb_records(db_path: str) -> Iterator[StoredRecord]:
    plyvel = import_plyvel()
    db = _open_leveldb(plyvel, db_path)
    try:
        for key, value in db.iterator():
            yield StoredRecord(key=key, value=value)
    finally:
        db.close()


def _iter_lmdb_records(db_path: str) -> Iterator[StoredRecord]:
    lmdb = import_lmdb()
    env = _open_lmdb(lmdb, db_path)
    try:
        with env.begin() as txn:
            for key, value in txn.cursor():
                yield StoredRecord(key=bytes(key), value=bytes(value))
    finally:
        env.close()


def _open_leveldb(plyvel: Any, db_path: str) -> Any:
    try:
        return plyvel.DB(db_path, create_if_missing=False)
    except (plyvel.Error, OSError) as error:
        raise ImagesetBackendOpenError(
            f"Failed to open leveldb {db_path} for reading: {error}."
        ) from error


def _open_lmdb(lmdb: Any, db_path: str) -> Any:
    try:
        return lmdb.open(db_path, readonly=True, lock=False, subdir=True)
    except lmdb.Error as error:
        raise ImagesetBackendOpenError(
            f"Failed to open lmdb {db_path} for reading: {error}."
        ) from error
