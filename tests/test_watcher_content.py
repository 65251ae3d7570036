"""Tests for config content loading, enablement and value equality."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from configwatch.watcher import (
    ActiveRegistry,
    ConfigDiff,
    ConfigEntity,
    ContentLoadError,
    ValueKind,
    content_equal,
    is_config_enabled,
    load_config_detail,
)
from configwatch.watcher.value import ensure_structured, value_kind
from tests.utils import write_config


class TestValueKind:
    """Test tagging of structured values."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, ValueKind.NULL),
            (True, ValueKind.BOOL),
            (1, ValueKind.INTEGER),
            (1.5, ValueKind.REAL),
            ("s", ValueKind.STRING),
            ([1], ValueKind.ARRAY),
            ({"k": 1}, ValueKind.OBJECT),
        ],
    )
    def test_kinds(self, value: object, kind: ValueKind) -> None:
        assert value_kind(value) is kind

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="unsupported value type"):
            value_kind({1, 2})

    def test_ensure_structured_reports_path(self) -> None:
        with pytest.raises(TypeError, match=r"\$\.inputs\[1\]"):
            ensure_structured({"inputs": [1, object()]})

    def test_ensure_structured_rejects_non_string_keys(self) -> None:
        with pytest.raises(TypeError, match="non-string key"):
            ensure_structured({1: "a"})

    def test_ensure_structured_rejects_nan(self) -> None:
        with pytest.raises(TypeError, match="non-finite"):
            ensure_structured({"x": float("nan")})


class TestContentEqual:
    """Test type-strict deep equality."""

    def test_nested_equal_ignores_key_order(self) -> None:
        left = {"a": [1, {"b": "c"}], "d": None}
        right = {"d": None, "a": [1, {"b": "c"}]}
        assert content_equal(left, right)

    def test_int_real_bool_differ(self) -> None:
        assert not content_equal(1, 1.0)
        assert not content_equal(1, True)
        assert not content_equal({"v": 0}, {"v": False})

    def test_array_order_matters(self) -> None:
        assert not content_equal([1, 2], [2, 1])

    def test_missing_key_differs(self) -> None:
        assert not content_equal({"a": 1}, {"a": 1, "b": 2})


class TestLoadConfigDetail:
    """Test the default config file loader."""

    def test_load_json(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.json", {"enable": True, "n": 1})
        assert load_config_detail(path) == {"enable": True, "n": 1}

    def test_load_yaml_and_yml(self, tmp_path: Path) -> None:
        a = write_config(tmp_path / "a.yaml", text="enable: true\nlist: [1, 2]\n")
        b = write_config(tmp_path / "b.yml", text="enable: false\n")

        assert load_config_detail(a) == {"enable": True, "list": [1, 2]}
        assert load_config_detail(b) == {"enable": False}

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.toml", text="enable = true\n")

        with pytest.raises(ContentLoadError, match="unsupported config file format"):
            load_config_detail(path)

    def test_reserved_name(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "region_config.json", {})

        with pytest.raises(ContentLoadError, match="reserved"):
            load_config_detail(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.yaml", text="  \n")

        with pytest.raises(ContentLoadError, match="empty config file"):
            load_config_detail(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.json", text="{not json")

        with pytest.raises(ContentLoadError, match="format error") as exc_info:
            load_config_detail(path)

        assert exc_info.value.path == str(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.yaml", text="- a\n- b\n")

        with pytest.raises(ContentLoadError, match="not a mapping"):
            load_config_detail(path)

    def test_yaml_timestamp_is_rejected(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.yaml", text="since: 2024-01-01\n")

        with pytest.raises(ContentLoadError, match="unsupported config value"):
            load_config_detail(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ContentLoadError, match="failed to open"):
            load_config_detail(tmp_path / "gone.json")

    def test_custom_extensions(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "app.yml", text="enable: true\n")

        with pytest.raises(ContentLoadError):
            load_config_detail(path, extensions=(".json",))


class TestIsConfigEnabled:
    """Test the enable flag."""

    def test_missing_key_is_enabled(self) -> None:
        assert is_config_enabled("app", {}) is True

    def test_bool_values(self) -> None:
        assert is_config_enabled("app", {"enable": True}) is True
        assert is_config_enabled("app", {"enable": False}) is False

    def test_non_bool_is_disabled_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="configwatch"):
            assert is_config_enabled("app", {"enable": 1}) is False

        assert "not of type bool" in caplog.text


class TestActiveRegistry:
    """Test the in-memory registry used to apply diffs."""

    def test_apply_add_modify_remove(self) -> None:
        registry = ActiveRegistry()
        registry.apply(
            ConfigDiff(added=[ConfigEntity("a", {"v": 1}, "/d"), ConfigEntity("b", {}, "/d")])
        )
        assert sorted(registry.names()) == ["a", "b"]

        registry.apply(
            ConfigDiff(modified=[ConfigEntity("a", {"v": 2}, "/d")], removed=["b"])
        )

        assert registry.find("a").content == {"v": 2}
        assert registry.find("b") is None
        assert len(registry) == 1

    def test_remove_unknown_name_is_ignored(self) -> None:
        registry = ActiveRegistry()
        registry.apply(ConfigDiff(removed=["ghost"]))
        assert len(registry) == 0
