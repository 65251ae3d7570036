"""configwatch: config reconciliation core for hot-reloading agents."""

__version__ = "0.1.0"

from configwatch.config import Settings, load_settings
from configwatch.watcher import (
    ActiveRegistry,
    ConfigDiff,
    ConfigEntity,
    ConfigPolicy,
    ConfigWatcher,
    ContentLoadError,
    DirectoryLockRegistry,
    FileSignature,
    ReloadPoller,
    ScanIssue,
    SignatureCache,
)

__all__ = [
    # Engine
    "ConfigWatcher",
    "ConfigPolicy",
    "ReloadPoller",
    # Results
    "ConfigDiff",
    "ConfigEntity",
    "ScanIssue",
    # State
    "FileSignature",
    "SignatureCache",
    "DirectoryLockRegistry",
    # Collaborators
    "ActiveRegistry",
    "ContentLoadError",
    # Settings
    "Settings",
    "load_settings",
]
