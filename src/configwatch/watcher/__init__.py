"""Config reconciliation for hot-reload.

Compares config source directories with the configs currently running
and produces an added / modified / removed diff.

Example usage:
    from configwatch.watcher import ActiveRegistry, ConfigPolicy, ConfigWatcher

    registry = ActiveRegistry()
    watcher = ConfigWatcher(ConfigPolicy.for_registry(registry), ["/etc/agent/conf"])

    diff = watcher.scan_once()
    registry.apply(diff)
"""

from configwatch.watcher.content import (
    ContentLoadError,
    is_config_enabled,
    load_config_detail,
)
from configwatch.watcher.diff import ConfigDiff, ConfigEntity, ScanReport
from configwatch.watcher.engine import ConfigWatcher
from configwatch.watcher.locks import DirectoryLock, DirectoryLockRegistry
from configwatch.watcher.poller import ReloadPoller
from configwatch.watcher.policy import ConfigPolicy
from configwatch.watcher.probe import ScanIssue
from configwatch.watcher.registry import ActiveRegistry
from configwatch.watcher.signature import FileSignature, SignatureCache
from configwatch.watcher.value import ValueKind, content_equal

__all__ = [
    # Engine
    "ConfigWatcher",
    "ConfigPolicy",
    "ReloadPoller",
    # Results
    "ConfigDiff",
    "ConfigEntity",
    "ScanReport",
    "ScanIssue",
    # State
    "FileSignature",
    "SignatureCache",
    "DirectoryLock",
    "DirectoryLockRegistry",
    # Default collaborators
    "ActiveRegistry",
    "ContentLoadError",
    "load_config_detail",
    "is_config_enabled",
    # Values
    "ValueKind",
    "content_equal",
]
