"""Per-file change detection.

A file signature is the (size, mtime) pair observed by ``stat``. The
watcher re-reads a file only when its signature differs from the one it
cached on the previous scan.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Collection, Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileSignature:
    """Cheap proxy for "this file's content may have changed"."""

    size: int
    mtime_ns: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileSignature:
        return cls(size=st.st_size, mtime_ns=st.st_mtime_ns)


def config_name_of(path: str | Path) -> str:
    """Derive a config name from a file path (base name without extension)."""
    return Path(path).stem


class SignatureCache:
    """Maps a file path to the last signature seen for it.

    Owned by a single watcher and mutated only from its scans; not
    thread-safe.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FileSignature] = {}

    def get(self, path: str) -> FileSignature | None:
        return self._entries.get(path)

    def put(self, path: str, signature: FileSignature) -> None:
        self._entries[path] = signature

    def prune_except(
        self,
        valid_names: Collection[str],
        name_of: Callable[[str], str] = config_name_of,
    ) -> list[str]:
        """Drop entries whose derived name is not in ``valid_names``.

        Returns:
            The pruned paths.
        """
        stale = [path for path in self._entries if name_of(path) not in valid_names]
        for path in stale:
            del self._entries[path]
        return stale

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
