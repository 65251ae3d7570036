"""Filesystem probes used by a scan.

Each probe returns a result object instead of raising: a missing or
unreadable directory is an expected condition while scanning, so the
caller inspects ``issue`` rather than catching exceptions.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from configwatch.watcher.signature import FileSignature


class ScanIssue(Enum):
    """Why a directory, file or config was left out of a diff."""

    DIRECTORY_UNAVAILABLE = "directory_unavailable"
    ENTRY_UNREADABLE = "entry_unreadable"
    CONTENT_LOAD_FAILURE = "content_load_failure"
    DUPLICATE_NAME = "duplicate_name"
    DISABLED_BY_POLICY = "disabled_by_policy"


@dataclass(frozen=True)
class DirectoryListing:
    """Entries of a source directory, or the reason it was skipped.

    Attributes:
        directory: The directory that was probed.
        entries: Entry paths sorted by file name; empty when ``issue`` is set.
        issue: DIRECTORY_UNAVAILABLE if the directory could not be used.
        reason: Human-readable detail for logs.
    """

    directory: Path
    entries: list[Path] = field(default_factory=list)
    issue: ScanIssue | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.issue is None


@dataclass(frozen=True)
class EntryProbe:
    """Signature of a regular file, or the reason it was skipped."""

    path: Path
    signature: FileSignature | None = None
    issue: ScanIssue | None = None
    reason: str = ""
    regular: bool = True

    @property
    def ok(self) -> bool:
        return self.issue is None


def list_directory(directory: str | Path) -> DirectoryListing:
    """Stat and enumerate a source directory.

    Args:
        directory: Directory to list.

    Returns:
        A DirectoryListing; never raises for filesystem errors.
    """
    path = Path(directory)

    try:
        st = path.stat()
    except FileNotFoundError:
        return DirectoryListing(
            path, issue=ScanIssue.DIRECTORY_UNAVAILABLE, reason="config dir path not existed"
        )
    except OSError as e:
        return DirectoryListing(
            path,
            issue=ScanIssue.DIRECTORY_UNAVAILABLE,
            reason=f"failed to get config dir path info: {e}",
        )

    if not stat.S_ISDIR(st.st_mode):
        return DirectoryListing(
            path,
            issue=ScanIssue.DIRECTORY_UNAVAILABLE,
            reason="config dir path is not a directory",
        )

    try:
        with os.scandir(path) as it:
            names = sorted(entry.name for entry in it)
    except OSError as e:
        return DirectoryListing(
            path,
            issue=ScanIssue.DIRECTORY_UNAVAILABLE,
            reason=f"failed to list config dir: {e}",
        )

    return DirectoryListing(path, entries=[path / name for name in names])


def probe_entry(path: Path) -> EntryProbe:
    """Stat a directory entry, following symlinks.

    Returns:
        An EntryProbe with the file's signature, or ENTRY_UNREADABLE when
        the entry vanished, cannot be stat'd, or is not a regular file.
    """
    try:
        st = path.stat()
    except OSError as e:
        return EntryProbe(path, issue=ScanIssue.ENTRY_UNREADABLE, reason=f"failed to stat: {e}")

    if not stat.S_ISREG(st.st_mode):
        return EntryProbe(
            path, issue=ScanIssue.ENTRY_UNREADABLE, reason="not a regular file", regular=False
        )

    return EntryProbe(path, signature=FileSignature.from_stat(st))
