"""Settings for the process that hosts the config watcher.

Layered YAML settings with:
- System-level file (/etc/configwatch/ or %PROGRAMDATA%)
- User-level file (~/.config/configwatch/ or %APPDATA%)
- An explicit file given on the command line
- Environment variable overrides (highest priority)

Example usage:
    from configwatch.config import load_settings

    settings = load_settings("/etc/agent/watch.yaml")
    print(settings.watch.source_dirs)
"""

from configwatch.config.loader import (
    dict_to_settings,
    load_settings,
    load_yaml_file,
)
from configwatch.config.paths import (
    get_settings_paths,
    get_system_settings_path,
    get_user_settings_path,
)
from configwatch.config.schema import (
    LoggingConfig,
    Settings,
    WatchConfig,
)

__all__ = [
    "Settings",
    "WatchConfig",
    "LoggingConfig",
    "load_settings",
    "load_yaml_file",
    "dict_to_settings",
    "get_settings_paths",
    "get_system_settings_path",
    "get_user_settings_path",
]
