"""Root pytest configuration and shared fixtures for the envmatrix test suite."""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from envmatrix import MANIFEST_ENV_VAR, NullAliasSource, Row  # noqa: E402
from envmatrix_logging import ROOT_LOGGER_NAME  # noqa: E402


class StaticAliasSource:
    """Alias source returning a fixed listing and counting queries."""

    def __init__(self, listing: str = "") -> None:
        self.text = listing
        self.calls = 0

    def listing(self) -> str:
        self.calls += 1
        return self.text


@pytest.fixture(autouse=True)
def propagate_logs():
    """Let caplog see records from the envmatrix logger hierarchy.

    Also undoes any level or handler changes a CLI invocation made.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    previous = (logger.propagate, logger.level, list(logger.handlers))
    logger.propagate = True
    yield
    logger.propagate, level, handlers = previous
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user configuration and shell settings out of every test."""
    monkeypatch.delenv(MANIFEST_ENV_VAR, raising=False)
    monkeypatch.delenv("ENVMATRIX_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def make_manifest(tmp_path):
    """Create a manifest file under ``tmp_path`` and return its path as text."""

    def _make(name: str = "requirements.txt", content: str = "envmatrix>=0.1\n") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _make


@pytest.fixture
def make_row(make_manifest):
    """Create a row backed by a valid manifest."""

    def _make(version: str, name: str = "requirements.txt") -> Row:
        return Row(version, make_manifest(name))

    return _make


@pytest.fixture
def no_aliases():
    """Alias source for an environment without an alias tool."""
    return NullAliasSource()


@pytest.fixture
def alias_source():
    """Factory for alias sources with a fixed listing."""
    return StaticAliasSource
