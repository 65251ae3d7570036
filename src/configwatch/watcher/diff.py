"""Result types of a reconciliation scan."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from configwatch.watcher.probe import ScanIssue


@dataclass
class ConfigEntity:
    """A named configuration read from a source directory.

    Attributes:
        name: File base name without extension.
        content: Parsed structured body of the file.
        source_dir: Directory the file was found in.
    """

    name: str
    content: dict[str, Any]
    source_dir: str

    def __repr__(self) -> str:
        return f"ConfigEntity({self.name!r}, source_dir={self.source_dir!r})"


@dataclass
class ConfigDiff:
    """Changes between the source directories and the active registry.

    A name appears in at most one of the three lists. The order inside a
    list follows directory enumeration and carries no meaning.
    """

    added: list[ConfigEntity] = field(default_factory=list)
    modified: list[ConfigEntity] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.removed)

    def names(self) -> set[str]:
        """All config names touched by this diff."""
        return (
            {e.name for e in self.added}
            | {e.name for e in self.modified}
            | set(self.removed)
        )

    def __len__(self) -> int:
        return len(self.added) + len(self.modified) + len(self.removed)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for logs and CLI output."""
        return {
            "added": [e.name for e in self.added],
            "modified": [e.name for e in self.modified],
            "removed": list(self.removed),
        }


@dataclass
class ScanReport:
    """Bookkeeping of one scan, for diagnostics."""

    directories_scanned: int = 0
    directories_skipped: int = 0
    entries_seen: int = 0
    pruned_signatures: int = 0
    issues: Counter[ScanIssue] = field(default_factory=Counter)

    def record(self, issue: ScanIssue) -> None:
        self.issues[issue] += 1
