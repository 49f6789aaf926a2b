"""File helpers shared by the JSON repositories.

Whole-file rewrites go to a temporary file in the same directory and are
moved over the target with ``os.replace``, so a reader sees either the old
content or the new content, never a half-written file.

Read-modify-write and check-then-append sequences hold an inter-process
lock on a ``<file>.lock`` sibling, which also orders threads of the same
process because every acquire opens its own lock handle.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from turfledger.domain.exceptions import ConcurrencyConflictError

LOCK_TIMEOUT_SECONDS = 10.0


@contextmanager
def locked(path: Path, timeout: float = LOCK_TIMEOUT_SECONDS) -> Iterator[None]:
    """Hold the lock guarding ``path`` for the duration of the block.

    Raises ConcurrencyConflictError if another writer keeps it past
    ``timeout``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(f"{path}.lock", timeout=timeout)
    try:
        lock.acquire()
    except Timeout as exc:
        raise ConcurrencyConflictError(f"Timed out waiting for a lock on {path.name}") from exc
    try:
        yield
    finally:
        lock.release()


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp.write(text)
        tmp.flush()
        os.fsync(tmp.fileno())
    try:
        os.replace(tmp.name, path)
    except OSError:
        os.unlink(tmp.name)
        raise
