"""Shared test fixtures for dotlog test suite."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from dotlog.channels import Channel
from dotlog.manager import set_registry
from dotlog.registry import Registry


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded or long-running tests")


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
class RecordingChannel(Channel):
    """Channel that keeps every message it receives."""

    def __init__(self):
        self.messages = []

    def log(self, message):
        self.messages.append(message)

    @property
    def texts(self):
        return [m.text for m in self.messages]


@pytest.fixture
def recorder():
    return RecordingChannel()


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------
@pytest.fixture
def registry():
    """A private Registry, not shared with the module-level default."""
    reg = Registry()
    yield reg
    reg.shutdown()


@pytest.fixture(autouse=True)
def _isolated_default_registry():
    """Give each test its own default registry and restore the old one after."""
    previous = set_registry(Registry())
    yield
    set_registry(previous)


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.dotlog/config.*."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def no_env_config(monkeypatch):
    """Make sure DOTLOG_CONFIG from the caller's shell does not leak in."""
    monkeypatch.delenv("DOTLOG_CONFIG", raising=False)


@pytest.fixture
def tmp_project(tmp_path):
    """Provide a temporary project directory with a nested subdirectory."""
    project = tmp_path / "project"
    (project / "src" / "pkg").mkdir(parents=True)
    return project


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
SAMPLE_CONFIG = {
    "dotlog": {
        "channels": {
            "quiet": {"type": "null"},
        },
        "root": {"level": "WARNING", "channel": "quiet"},
        "loggers": [
            {"name": "svc", "level": "INFO"},
            {"name": "svc.db", "level": "DEBUG"},
        ],
    }
}


@pytest.fixture
def sample_project_config(tmp_project):
    """Write a .dotlog.json file in the tmp project."""
    path = tmp_project / ".dotlog.json"
    path.write_text(json.dumps(SAMPLE_CONFIG, indent=2), encoding="utf-8")
    return path, SAMPLE_CONFIG


@pytest.fixture
def sample_global_config(tmp_config_home):
    """Write a global YAML config file in the tmp home."""
    config_dir = tmp_config_home / ".dotlog"
    config_dir.mkdir()
    path = config_dir / "config.yaml"
    path.write_text(
        "dotlog:\n"
        "  root:\n"
        "    level: ERROR\n",
        encoding="utf-8",
    )
    return path
