"""Default content loader and enablement check for config files.

A config file is a JSON or YAML document whose top level is a mapping.
Its ``enable`` key, when present, turns the config on or off.
"""

from __future__ import annotations

import json
from collections.abc import Collection
from pathlib import Path
from typing import Any

import yaml

from configwatch.config.schema import RESERVED_NAMES, SUPPORTED_EXTENSIONS
from configwatch.logging import get_logger
from configwatch.watcher.value import ensure_structured

log = get_logger("watcher.content")

ENABLE_KEY = "enable"


class ContentLoadError(Exception):
    """A config file revision that cannot be accepted.

    Raised when:
    - The extension is not a supported format
    - The file cannot be read or is empty
    - The content does not parse
    - The top-level value is not a mapping
    - A value falls outside the structured-value model
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = str(path)
        self.reason = reason


def parse_config_detail(text: str, ext: str) -> dict[str, Any]:
    """Parse the text of a config file.

    Args:
        text: File content.
        ext: Lowercase extension including the dot (".json", ".yaml", ".yml").

    Returns:
        The parsed mapping.

    Raises:
        ValueError: If the text does not parse to a structured mapping.
    """
    if ext == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"config file format error: {e}") from e
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"config file format error: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("config file content is not a mapping")

    try:
        ensure_structured(data)
    except TypeError as e:
        raise ValueError(f"unsupported config value: {e}") from e
    return data


def load_config_detail(
    path: str | Path,
    *,
    extensions: Collection[str] = SUPPORTED_EXTENSIONS,
    reserved_names: Collection[str] = RESERVED_NAMES,
) -> dict[str, Any]:
    """Read and parse one config file.

    Args:
        path: Config file path.
        extensions: Accepted file extensions.
        reserved_names: Config names that are never loaded.

    Returns:
        The parsed config body.

    Raises:
        ContentLoadError: If this revision of the file cannot be accepted.
    """
    path = Path(path)
    if path.stem in reserved_names:
        raise ContentLoadError(path, "reserved config name")

    ext = path.suffix.lower()
    if ext not in extensions:
        raise ContentLoadError(path, "unsupported config file format")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentLoadError(path, f"failed to open config file: {e}") from e

    if not text.strip():
        raise ContentLoadError(path, "empty config file")

    try:
        return parse_config_detail(text, ext)
    except ValueError as e:
        raise ContentLoadError(path, str(e)) from e


def is_config_enabled(name: str, content: dict[str, Any]) -> bool:
    """Decide whether a parsed config is switched on.

    A missing ``enable`` key means enabled. A non-boolean value is
    rejected and treated as disabled.
    """
    if ENABLE_KEY not in content:
        return True
    value = content[ENABLE_KEY]
    if not isinstance(value, bool):
        log.warning(
            "Param %r is not of type bool, ignoring config %s", ENABLE_KEY, name
        )
        return False
    return value
