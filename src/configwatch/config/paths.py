"""Platform-aware settings path resolution.

Handles settings file locations for:
- Windows: %PROGRAMDATA% (system), %APPDATA% (user)
- Unix: /etc/ (system), ~/.config/configwatch/ or ~/.configwatch/ (user)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

SETTINGS_FILENAME = "config.yaml"
APP_NAME = "configwatch"
SHORT_NAME = ".configwatch"


def get_system_settings_path() -> Path | None:
    """Get system-level settings path.

    Returns:
        Path to the system settings file, or None if not determinable.
        The file may not exist.
    """
    if sys.platform == "win32":
        program_data = os.environ.get("PROGRAMDATA")
        if program_data:
            return Path(program_data) / APP_NAME / SETTINGS_FILENAME
        return None
    return Path("/etc") / APP_NAME / SETTINGS_FILENAME


def get_user_settings_path() -> Path | None:
    """Get user-level settings path.

    Returns:
        Path to the user settings file, or None if not determinable.
        The file may not exist.
    """
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME / SETTINGS_FILENAME
        return None

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME / SETTINGS_FILENAME

    home = Path.home()
    xdg_default = home / ".config"
    if xdg_default.exists():
        return xdg_default / APP_NAME / SETTINGS_FILENAME

    return home / SHORT_NAME / SETTINGS_FILENAME


def get_settings_paths(explicit: str | Path | None = None) -> list[Path]:
    """Get all settings paths in priority order (lowest to highest).

    Args:
        explicit: Optional settings file given on the command line.

    Returns:
        List of paths in order: system, user, explicit.
    """
    paths: list[Path] = []

    system_path = get_system_settings_path()
    if system_path:
        paths.append(system_path)

    user_path = get_user_settings_path()
    if user_path:
        paths.append(user_path)

    if explicit:
        paths.append(Path(explicit))

    return paths
