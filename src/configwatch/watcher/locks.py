"""Directory locks shared with external config writers.

A config provider that drops files into a source directory registers the
mutex it holds while writing. The watcher takes that mutex around each
entry it inspects in the directory. Directories without a registered lock
are treated as private to the agent and scanned unsynchronized.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class DirectoryLock(Protocol):
    """Anything usable as ``with lock:``, e.g. ``threading.Lock``."""

    def __enter__(self) -> object: ...

    def __exit__(self, *args: object) -> object: ...


def _key(directory: str | Path) -> str:
    return str(Path(directory))


class DirectoryLockRegistry:
    """Maps a source directory to the optional lock guarding it."""

    def __init__(self) -> None:
        self._locks: dict[str, DirectoryLock] = {}

    def register(self, directory: str | Path, lock: DirectoryLock) -> None:
        """Register (or replace) the lock for a directory."""
        self._locks[_key(directory)] = lock

    def unregister(self, directory: str | Path) -> bool:
        """Forget a directory's lock.

        Returns:
            True if a lock was registered.
        """
        return self._locks.pop(_key(directory), None) is not None

    def lock_for(self, directory: str | Path) -> DirectoryLock | None:
        return self._locks.get(_key(directory))

    def clear(self) -> None:
        self._locks.clear()

    def __len__(self) -> int:
        return len(self._locks)
