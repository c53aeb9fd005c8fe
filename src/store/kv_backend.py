"""Key-value backend contract.

This module defines the write interface shared by embedded store engines.
Drivers depend on this protocol only, never on engine-specific handles.
"""

from __future__ import annotations

from typing import Literal, Protocol

from core.errors import ImagesetBackendWriteError

BackendState = Literal["idle", "batch_open", "committing", "committed", "closed"]


class KVBackend(Protocol):
    """Batched transactional writer over one embedded store.

    A backend is opened once, receives puts grouped into commit-bounded
    batches, and is closed once. Exactly one batch is open between
    ``open`` and ``final_commit``.
    """

    name: str
    db_path: str

    @property
    def state(self) -> BackendState: ...

    def open(self) -> None: ...

    def put(self, key: bytes, value: bytes) -> None: ...

    def commit_and_begin_next(self) -> None: ...

    def final_commit(self) -> None: ...

    def close(self) -> None: ...


def require_state(
    current: BackendState,
    expected: BackendState,
    backend_name: str,
    operation: str,
) -> None:
    """Reject operations issued from the wrong write-path state.

    Raises:
        ImagesetBackendWriteError: If ``current`` differs from ``expected``.
    """
    if current != expected:
        raise ImagesetBackendWriteError(
            f"Cannot {operation} on {backend_name} backend in state '{current}'; "
            f"expected '{expected}'."
        )
