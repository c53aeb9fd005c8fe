"""Backend selection for conversion runs.

This module maps a configured engine name onto a concrete backend.
Selection happens once at startup, before any store I/O.
"""

from __future__ import annotations

from core.config import ImagesetConfig
from core.constants import LEVELDB_BACKEND, LMDB_BACKEND, SUPPORTED_BACKENDS
from core.errors import ImagesetConfigError
from store.kv_backend import KVBackend
from store.leveldb_backend import LevelDBBackend
from store.lmdb_backend import LmdbBackend


def create_backend(backend_name: str, db_path: str, config: ImagesetConfig) -> KVBackend:
    """Build an unopened backend for the requested engine.

    Args:
        backend_name: Engine name, ``leveldb`` or ``lmdb``.
        db_path: Target store path.
        config: Runtime configuration.

    Returns:
        Backend ready for ``open``.

    Raises:
        ImagesetConfigError: If the engine name is not supported.
    """
    if backend_name == LEVELDB_BACKEND:
        return LevelDBBackend(db_path)
    if backend_name == LMDB_BACKEND:
        return LmdbBackend(db_path, map_size=config.lmdb_map_size)
    raise ImagesetConfigError(
        f"Unknown db backend '{backend_name}'. "
        f"Use one of: {', '.join(SUPPORTED_BACKENDS)}."
    )


def validate_backend_name(backend_name: str) -> str:
    """Return the backend name when supported, else raise a config error."""
    if backend_name in SUPPORTED_BACKENDS:
        return backend_name
    raise ImagesetConfigError(
        f"Unknown db backend '{backend_name}'. "
        f"Use one of: {', '.join(SUPPORTED_BACKENDS)}."
    )
