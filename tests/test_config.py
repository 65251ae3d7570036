"""Tests for the settings module."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from configwatch.config import (
    Settings,
    WatchConfig,
    dict_to_settings,
    get_settings_paths,
    get_system_settings_path,
    get_user_settings_path,
    load_settings,
)
from configwatch.config.merge import deep_merge, merge_layers


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real system/user settings and env vars out of the tests."""
    monkeypatch.setattr(
        "configwatch.config.loader.get_settings_paths",
        lambda explicit=None: [Path(explicit)] if explicit else [],
    )
    monkeypatch.delenv("CONFIGWATCH_LOG", raising=False)
    monkeypatch.delenv("CONFIGWATCH_SOURCE_DIRS", raising=False)


class TestDeepMerge:
    """Test the deep merge algorithm."""

    def test_simple_override(self) -> None:
        assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self) -> None:
        base = {"watch": {"poll_interval": 10, "source_dirs": ["/a"]}}
        override = {"watch": {"poll_interval": 5}}

        result = deep_merge(base, override)

        assert result["watch"] == {"poll_interval": 5, "source_dirs": ["/a"]}

    def test_none_does_not_override(self) -> None:
        assert deep_merge({"a": 1}, {"a": None}) == {"a": 1}

    def test_list_replaced_not_merged(self) -> None:
        result = deep_merge({"dirs": ["/a", "/b"]}, {"dirs": ["/c"]})
        assert result["dirs"] == ["/c"]

    def test_base_not_mutated(self) -> None:
        base = {"watch": {"poll_interval": 10}}
        deep_merge(base, {"watch": {"poll_interval": 1}})
        assert base == {"watch": {"poll_interval": 10}}

    def test_merge_layers_order(self) -> None:
        assert merge_layers({"a": 1, "b": 2}, {}, {"b": 3}, {"c": 4}) == {
            "a": 1,
            "b": 3,
            "c": 4,
        }


class TestSettingsPaths:
    """Test platform-aware path resolution."""

    def test_unix_system_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        assert get_system_settings_path() == Path("/etc/configwatch/config.yaml")

    def test_windows_system_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "win32")
        monkeypatch.setenv("PROGRAMDATA", "C:\\ProgramData")

        path = get_system_settings_path()

        assert path is not None
        assert "ProgramData" in str(path)
        assert "configwatch" in str(path)

    def test_windows_without_programdata(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "win32")
        monkeypatch.delenv("PROGRAMDATA", raising=False)
        assert get_system_settings_path() is None

    def test_unix_user_path_xdg(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", "/home/test/.config-custom")

        path = get_user_settings_path()

        assert path == Path("/home/test/.config-custom/configwatch/config.yaml")

    def test_unix_user_path_fallback(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_user_settings_path() == tmp_path / ".configwatch" / "config.yaml"

    def test_paths_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg")

        paths = get_settings_paths("/opt/agent/watch.yaml")

        assert paths == [
            Path("/etc/configwatch/config.yaml"),
            Path("/xdg/configwatch/config.yaml"),
            Path("/opt/agent/watch.yaml"),
        ]


class TestSettingsLoading:
    """Test settings loading."""

    def test_defaults(self) -> None:
        settings = load_settings()

        assert isinstance(settings, Settings)
        assert settings.watch.source_dirs == []
        assert settings.watch.poll_interval == 10.0
        assert settings.watch.reserved_names == ["region_config"]
        assert settings.watch.extensions == [".json", ".yaml", ".yml"]
        assert settings.logging.level is None

    def test_load_yaml(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "watch.yaml"
        settings_file.write_text(
            """
watch:
  source_dirs:
    - /etc/agent/local
    - /etc/agent/remote
  poll_interval: 3
logging:
  level: DEBUG
custom:
  key: value
"""
        )

        settings = load_settings(settings_file)

        assert settings.watch.source_dirs == ["/etc/agent/local", "/etc/agent/remote"]
        assert settings.watch.poll_interval == 3.0
        assert settings.logging.level == "DEBUG"
        assert settings.extra == {"custom": {"key": "value"}}

    def test_invalid_yaml_uses_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings_file = tmp_path / "watch.yaml"
        settings_file.write_text("watch: [unclosed")

        settings = load_settings(settings_file)

        assert settings.watch.source_dirs == []
        assert "Invalid YAML" in caplog.text

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.watch.poll_interval == 10.0

    def test_env_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settings_file = tmp_path / "watch.yaml"
        settings_file.write_text("watch:\n  source_dirs: [/from/file]\n")
        monkeypatch.setenv("CONFIGWATCH_SOURCE_DIRS", os.pathsep.join(["/a", "/b"]))
        monkeypatch.setenv("CONFIGWATCH_LOG", "/tmp/configwatch.log")

        settings = load_settings(settings_file)

        assert settings.watch.source_dirs == ["/a", "/b"]
        assert settings.logging.file == "/tmp/configwatch.log"

    def test_non_positive_interval_rejected(self) -> None:
        with pytest.raises(ValueError, match="poll_interval must be positive"):
            dict_to_settings({"watch": {"poll_interval": 0}})

    def test_watch_config_direct(self) -> None:
        with pytest.raises(ValueError):
            WatchConfig(poll_interval=-1)
