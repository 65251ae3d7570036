"""Collaborators a watcher consults during a scan.

One engine serves every kind of config; what differs between kinds is
bundled here and injected at construction.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from configwatch.watcher.content import is_config_enabled, load_config_detail

if TYPE_CHECKING:
    from configwatch.watcher.diff import ConfigEntity
    from configwatch.watcher.registry import ActiveRegistry

ContentLoader = Callable[[Path], dict[str, Any]]
EnabledCheck = Callable[[str, dict[str, Any]], bool]


@dataclass(frozen=True)
class ConfigPolicy:
    """Policy bundle for one kind of config.

    Attributes:
        load_content: Parses a file; raises ContentLoadError on failure.
        is_enabled: Whether a parsed config should run.
        find_active: Active entity for a name, or None.
        list_active_names: Names of every active entity.
    """

    load_content: ContentLoader
    is_enabled: EnabledCheck
    find_active: Callable[[str], ConfigEntity | None]
    list_active_names: Callable[[], Iterable[str]]

    @classmethod
    def for_registry(
        cls,
        registry: ActiveRegistry,
        *,
        loader: ContentLoader = load_config_detail,
        enabled: EnabledCheck = is_config_enabled,
    ) -> ConfigPolicy:
        """Build a policy reading from an in-memory registry."""
        return cls(
            load_content=loader,
            is_enabled=enabled,
            find_active=registry.find,
            list_active_names=registry.names,
        )
