"""Settings schema dataclasses for the configwatch agent process.

All fields have defaults so partial settings files merge cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_POLL_INTERVAL = 10.0
RESERVED_NAMES = ("region_config",)
SUPPORTED_EXTENSIONS = (".json", ".yaml", ".yml")


@dataclass
class WatchConfig:
    """Where configuration files are delivered and how often to scan.

    Example config.yaml:
        watch:
          source_dirs:
            - /etc/ilogtail/instance_config/local
            - /etc/ilogtail/instance_config/remote
          poll_interval: 10
    """

    source_dirs: list[str] = field(default_factory=list)
    poll_interval: float = DEFAULT_POLL_INTERVAL  # Seconds between scans
    reserved_names: list[str] = field(default_factory=lambda: list(RESERVED_NAMES))
    extensions: list[str] = field(default_factory=lambda: list(SUPPORTED_EXTENSIONS))

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {self.poll_interval}")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, overrides level
    file: str | None = None  # Log file path


@dataclass
class Settings:
    """Root settings object."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections are kept for extensions
    extra: dict[str, Any] = field(default_factory=dict)
