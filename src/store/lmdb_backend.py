"""LMDB storage backend.

This module writes records through one long-lived LMDB environment.
Each batch is a write transaction that is committed and immediately
replaced, so a transaction is always open until the final commit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.constants import LMDB_BACKEND, LMDB_DIR_MODE, LMDB_FILE_MODE
from core.errors import (
    ImagesetBackendOpenError,
    ImagesetBackendWriteError,
    ImagesetDependencyError,
)
from core.logging_config import get_logger
from store.kv_backend import BackendState, require_state

_LOGGER = get_logger(__name__)


class LmdbBackend:
    """Memory-mapped backend writing transactions into a new LMDB directory."""

    name = LMDB_BACKEND

    def __init__(self, db_path: str, map_size: int) -> None:
        self.db_path = db_path
        self._map_size = map_size
        self._env: Any = None
        self._txn: Any = None
        self._state: BackendState = "idle"

    @property
    def state(self) -> BackendState:
        """Current write-path state."""
        return self._state

    def open(self) -> None:
        """Create the store directory, environment, and first transaction.

        Raises:
            ImagesetBackendOpenError: If the directory or environment cannot be created.
            ImagesetDependencyError: If the lmdb package is not installed.
        """
        require_state(self._state, "idle", self.name, "open")
        lmdb = import_lmdb()
        _create_store_dir(Path(self.db_path))
        try:
            self._env = lmdb.open(
                self.db_path,
                map_size=self._map_size,
                subdir=True,
                mode=LMDB_FILE_MODE,
                create=False,
            )
            self._txn = self._env.begin(write=True)
        except lmdb.Error as error:
            self._abandon_env()
            raise ImagesetBackendOpenError(
                f"Failed to open lmdb {self.db_path}: {error}."
            ) from error
        self._state = "batch_open"
        _LOGGER.info(
            "backend_opened",
            backend=self.name,
            db_path=self.db_path,
            map_size=self._map_size,
        )

    def put(self, key: bytes, value: bytes) -> None:
        """Write one record into the current transaction."""
        require_state(self._state, "batch_open", self.name, "put")
        lmdb = import_lmdb()
        try:
            self._txn.put(key, value)
        except lmdb.Error as error:
            raise ImagesetBackendWriteError(
                f"Failed to put key {key!r} into lmdb {self.db_path}: {error}."
            ) from error

    def commit_and_begin_next(self) -> None:
        """Commit the current transaction and begin a replacement."""
        self._commit_txn()
        lmdb = import_lmdb()
        try:
            self._txn = self._env.begin(write=True)
        except lmdb.Error as error:
            raise ImagesetBackendWriteError(
                f"Failed to begin lmdb transaction on {self.db_path}: {error}."
            ) from error
        self._state = "batch_open"

    def final_commit(self) -> None:
        """Commit the trailing transaction without beginning another."""
        self._commit_txn()
        self._state = "committed"

    def close(self) -> None:
        """Abort any in-flight transaction and close the environment."""
        if self._state == "closed":
            return
        self._abandon_env()
        self._state = "closed"
        _LOGGER.info("backend_closed", backend=self.name, db_path=self.db_path)

    def _commit_txn(self) -> None:
        require_state(self._state, "batch_open", self.name, "commit")
        lmdb = import_lmdb()
        self._state = "committing"
        txn = self._txn
        self._txn = None
        try:
            txn.commit()
        except lmdb.Error as error:
            raise ImagesetBackendWriteError(
                f"Failed to commit transaction to lmdb {self.db_path}: {error}."
            ) from error

    def _abandon_env(self) -> None:
        if self._txn is not None:
            self._txn.abort()
            self._txn = None
        if self._env is not None:
            self._env.close()
            self._env = None


def _create_store_dir(store_dir: Path) -> None:
    """Create the LMDB directory, refusing to reuse an existing path."""
    try:
        store_dir.mkdir(mode=LMDB_DIR_MODE)
    except FileExistsError as error:
        raise ImagesetBackendOpenError(
            f"Failed to open lmdb {store_dir}: path already exists. "
            "Choose a new DB_NAME or remove the existing store."
        ) from error
    except OSError as error:
        raise ImagesetBackendOpenError(
            f"mkdir {store_dir} failed: {error}. Check that the parent directory "
            "exists and is writable."
        ) from error


def import_lmdb() -> Any:
    """Import the lmdb binding lazily.

    Raises:
        ImagesetDependencyError: If lmdb is missing.
    """
    try:
        import lmdb
    except ImportError as error:
        raise ImagesetDependencyError(
            "LMDB support requires the lmdb package, but it is not installed. "
            "Install with 'pip install lmdb'."
        ) from error
    return lmdb
