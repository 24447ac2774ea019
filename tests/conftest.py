"""
Shared test fixtures and configuration.
"""

import logging
import os
from pathlib import Path

import pytest

from oz_action.adapters.cache.tool_cache import ToolCache
from oz_action.adapters.ci.workflow import WorkflowCommandHandler

# Variables the code under test reads; tests must never see the host's.
_RUNNER_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "RUNNER_DEBUG",
    "RUNNER_TEMP",
    "RUNNER_TOOL_CACHE",
    "XDG_STATE_DIR",
    "OZ_ACTION_LOG_LEVEL",
    "OZ_ACTION_LOG_FILE",
    "OZ_ACTION_LOG_FILE_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    """Strip runner variables and action inputs from the environment."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in _RUNNER_VARS:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def linux_x64(monkeypatch):
    """Pretend to be an x86_64 Linux runner."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setattr("platform.machine", lambda: "x86_64")


@pytest.fixture
def tool_cache(tmp_path: Path) -> ToolCache:
    return ToolCache(tmp_path / "tool-cache")


@pytest.fixture
def tmp_state_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for the CLI's state files."""
    state_dir = tmp_path / "state"
    state_dir.mkdir()
    return state_dir


@pytest.fixture
def output_file(tmp_path: Path, monkeypatch) -> Path:
    """Point GITHUB_OUTPUT at a temp file."""
    path = tmp_path / "github_output"
    path.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo any ``setup_logging`` a test (or CLI invocation) performed."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, WorkflowCommandHandler) or type(handler) in (
            logging.StreamHandler,
            logging.FileHandler,
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
