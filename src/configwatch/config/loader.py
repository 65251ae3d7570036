"""Settings file loading.

Handles:
- YAML file parsing
- Environment variable overrides
- Conversion from dict to typed Settings dataclass
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from configwatch.config.merge import merge_layers
from configwatch.config.paths import get_settings_paths
from configwatch.config.schema import (
    DEFAULT_POLL_INTERVAL,
    RESERVED_NAMES,
    SUPPORTED_EXTENSIONS,
    LoggingConfig,
    Settings,
    WatchConfig,
)
from configwatch.logging import LOG_ENV_VAR, get_logger

log = get_logger("config")

SOURCE_DIRS_ENV_VAR = "CONFIGWATCH_SOURCE_DIRS"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML as dict, or empty dict on error.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build a settings dict from environment variables.

    Returns:
        Settings dict with values from environment.
    """
    overrides: dict[str, Any] = {}

    log_path = os.environ.get(LOG_ENV_VAR)
    if log_path:
        overrides["logging"] = {"file": log_path}

    source_dirs = os.environ.get(SOURCE_DIRS_ENV_VAR)
    if source_dirs:
        overrides["watch"] = {
            "source_dirs": [d for d in source_dirs.split(os.pathsep) if d],
        }

    return overrides


def _str_list(value: Any, default: tuple[str, ...] | list[str]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    return [str(v) for v in value if isinstance(v, (str, os.PathLike))]


def dict_to_settings(data: dict[str, Any]) -> Settings:
    """Convert a merged dict to the typed Settings dataclass.

    Raises:
        ValueError: If a value is out of range (e.g. poll_interval <= 0).
    """
    watch_data = data.get("watch") or {}
    poll_interval = watch_data.get("poll_interval", DEFAULT_POLL_INTERVAL)
    watch = WatchConfig(
        source_dirs=_str_list(watch_data.get("source_dirs"), []),
        poll_interval=float(poll_interval),
        reserved_names=_str_list(watch_data.get("reserved_names"), RESERVED_NAMES),
        extensions=_str_list(watch_data.get("extensions"), SUPPORTED_EXTENSIONS),
    )

    log_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    known_keys = {"watch", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Settings(watch=watch, logging=logging_config, extra=extra)


def load_settings(explicit: str | Path | None = None) -> Settings:
    """Load and merge settings from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Explicit settings file (command line)
    3. User settings
    4. System settings

    Args:
        explicit: Optional settings file path.

    Returns:
        Merged Settings object.
    """
    layers: list[dict[str, Any]] = []

    for path in get_settings_paths(explicit):
        layer = load_yaml_file(path)
        if layer:
            log.debug("Loaded settings from %s", path)
            layers.append(layer)

    env_layer = env_overrides()
    if env_layer:
        layers.append(env_layer)

    return dict_to_settings(merge_layers(*layers))
