"""LevelDB storage backend.

This module writes records through plyvel write batches. Each batch is
flushed atomically on commit and replaced with a fresh one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.constants import LEVELDB_BACKEND, LEVELDB_WRITE_BUFFER_SIZE
from core.errors import (
    ImagesetBackendOpenError,
    ImagesetBackendWriteError,
    ImagesetDependencyError,
)
from core.logging_config import get_logger
from store.kv_backend import BackendState, require_state

_LOGGER = get_logger(__name__)


class LevelDBBackend:
    """Ordered-log backend writing atomic batches into a new LevelDB."""

    name = LEVELDB_BACKEND

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._db: Any = None
        self._batch: Any = None
        self._state: BackendState = "idle"

    @property
    def state(self) -> BackendState:
        """Current write-path state."""
        return self._state

    def open(self) -> None:
        """Create the database and allocate the first write batch.

        Raises:
            ImagesetBackendOpenError: If the target exists or cannot be created.
            ImagesetDependencyError: If plyvel is not installed.
        """
        require_state(self._state, "idle", self.name, "open")
        plyvel = import_plyvel()
        if Path(self.db_path).exists():
            raise ImagesetBackendOpenError(
                f"Failed to open leveldb {self.db_path}: path already exists. "
                "Choose a new DB_NAME or remove the existing store."
            )
        try:
            self._db = plyvel.DB(
                self.db_path,
                create_if_missing=True,
                error_if_exists=True,
                write_buffer_size=LEVELDB_WRITE_BUFFER_SIZE,
            )
        except (plyvel.Error, OSError) as error:
            raise ImagesetBackendOpenError(
                f"Failed to open leveldb {self.db_path}: {error}."
            ) from error
        self._batch = self._db.write_batch()
        self._state = "batch_open"
        _LOGGER.info("backend_opened", backend=self.name, db_path=self.db_path)

    def put(self, key: bytes, value: bytes) -> None:
        """Buffer one record in the current batch."""
        require_state(self._state, "batch_open", self.name, "put")
        self._batch.put(key, value)

    def commit_and_begin_next(self) -> None:
        """Flush the current batch and allocate a fresh one."""
        self._write_batch()
        self._batch = self._db.write_batch()
        self._state = "batch_open"

    def final_commit(self) -> None:
        """Flush the trailing batch without allocating another."""
        self._write_batch()
        self._batch = None
        self._state = "committed"

    def close(self) -> None:
        """Close the database, discarding any unflushed batch."""
        if self._state == "closed":
            return
        if self._batch is not None:
            self._batch.clear()
            self._batch = None
        if self._db is not None:
            self._db.close()
            self._db = None
        self._state = "closed"
        _LOGGER.info("backend_closed", backend=self.name, db_path=self.db_path)

    def _write_batch(self) -> None:
        require_state(self._state, "batch_open", self.name, "commit")
        plyvel = import_plyvel()
        self._state = "committing"
        try:
            self._batch.write()
        except (plyvel.Error, OSError) as error:
            raise ImagesetBackendWriteError(
                f"Failed to commit batch to leveldb {self.db_path}: {error}."
            ) from error


def import_plyvel() -> Any:
    """Import plyvel lazily so LMDB-only installs keep working.

    Raises:
        ImagesetDependencyError: If plyvel is missing.
    """
    try:
        import plyvel
    except ImportError as error:
        raise ImagesetDependencyError(
            "LevelDB support requires plyvel, but it is not installed. "
            "Install with 'pip install imageset-kv[leveldb]'."
        ) from error
    return plyvel
