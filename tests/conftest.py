"""Root pytest configuration for all tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest

from configwatch.logging import reset_logging
from configwatch.watcher import (
    ActiveRegistry,
    ConfigPolicy,
    ConfigWatcher,
    load_config_detail,
)

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """An empty config source directory."""
    path = tmp_path / "local"
    path.mkdir()
    return path


@pytest.fixture
def registry() -> ActiveRegistry:
    return ActiveRegistry()


@pytest.fixture
def loader() -> Mock:
    """The default loader wrapped in a Mock to count calls."""
    return Mock(side_effect=load_config_detail)


@pytest.fixture
def watcher(config_dir: Path, registry: ActiveRegistry, loader: Mock) -> ConfigWatcher:
    """A watcher over ``config_dir`` backed by ``registry``."""
    return ConfigWatcher(ConfigPolicy.for_registry(registry, loader=loader), [config_dir])


@pytest.fixture
def clean_logging() -> Iterator[None]:
    """Undo setup_logging between tests."""
    reset_logging()
    yield
    reset_logging()
