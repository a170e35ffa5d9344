"""Shared fixtures for binclock tests."""

import logging
from datetime import datetime

import pytest

from binclock.core.config import ConfigManager
from binclock.style import MemoryStyleStore, YamlStyleStore


@pytest.fixture(autouse=True)
def reset_config_singleton():
    ConfigManager.reset_instance()
    yield
    ConfigManager.reset_instance()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def quarter_to_eleven():
    """Wall time 10:45 on 27 October."""
    return datetime(2024, 10, 27, 10, 45)


@pytest.fixture
def memory_store():
    return MemoryStyleStore()


@pytest.fixture
def style_path(tmp_path):
    return tmp_path / "styles.yaml"


@pytest.fixture
def yaml_store(style_path):
    return YamlStyleStore(style_path)
