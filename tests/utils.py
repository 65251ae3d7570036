"""Shared test utilities for configwatch tests."""

from __future__ import annotations

import itertools
import json
import os
from pathlib import Path
from typing import Any

# Explicit mtimes so a rewrite always changes the signature, even on
# filesystems with coarse timestamps.
_MTIME_NS = itertools.count(1_700_000_000 * 10**9, 10**9)


def write_config(path: Path, data: dict[str, Any] | None = None, *, text: str | None = None) -> Path:
    """Write a config file and give it a fresh, unique mtime.

    Args:
        path: File to write.
        data: Mapping serialized as JSON (ignored when ``text`` is given).
        text: Raw file content.

    Returns:
        The written path.
    """
    if text is None:
        text = json.dumps(data if data is not None else {})
    path.write_text(text, encoding="utf-8")
    stamp = next(_MTIME_NS)
    os.utime(path, ns=(stamp, stamp))
    return path


class RecordingLock:
    """Context-manager lock that records acquisitions."""

    def __init__(self) -> None:
        self.acquired = 0
        self.released = 0
        self.held = False

    def __enter__(self) -> RecordingLock:
        assert not self.held, "lock re-entered while held"
        self.held = True
        self.acquired += 1
        return self

    def __exit__(self, *args: object) -> None:
        self.held = False
        self.released += 1
