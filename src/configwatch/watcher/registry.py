"""In-memory registry of the configs currently in effect.

The watcher only reads it. Applying a diff is the caller's job and is
done with ``ActiveRegistry.apply``.
"""

from __future__ import annotations

from collections.abc import Iterator

from configwatch.logging import get_logger
from configwatch.watcher.diff import ConfigDiff, ConfigEntity

log = get_logger("watcher.registry")


class ActiveRegistry:
    """Configs currently running, keyed by name."""

    def __init__(self) -> None:
        self._entities: dict[str, ConfigEntity] = {}

    def find(self, name: str) -> ConfigEntity | None:
        """Get the active entity for a name, or None."""
        return self._entities.get(name)

    def names(self) -> list[str]:
        return list(self._entities)

    def apply(self, diff: ConfigDiff) -> None:
        """Apply a scan result: stop removed, then start added and modified."""
        for name in diff.removed:
            if self._entities.pop(name, None) is not None:
                log.info("Stopped config %s", name)
        for entity in diff.added:
            self._entities[entity.name] = entity
            log.info("Started config %s from %s", entity.name, entity.source_dir)
        for entity in diff.modified:
            self._entities[entity.name] = entity
            log.info("Reloaded config %s from %s", entity.name, entity.source_dir)

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[ConfigEntity]:
        return iter(list(self._entities.values()))
