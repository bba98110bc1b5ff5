"""Shared fixtures for CLI tests."""

import logging

import pytest
from typer.testing import CliRunner

from packages.core import HistoryEntry, clear_config_cache
from src.utils import config as cli_config


def _clear_caches() -> None:
    clear_config_cache()
    cli_config.get_store.cache_clear()
    cli_config.get_history.cache_clear()
    cli_config.get_preferences.cache_clear()


@pytest.fixture
def cli_runner():
    """Create a CliRunner instance for testing CLI commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Point configuration and persisted state at a temp directory."""
    monkeypatch.setenv("SIGNTRANSLATOR_ENV", "testing")
    monkeypatch.setenv("SIGNTRANSLATOR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SIGNTRANSLATOR_STATE_FILE", str(tmp_path / "state.json"))
    monkeypatch.setenv("SIGNTRANSLATOR_RECORDINGS_DIR", str(tmp_path / "recordings"))
    monkeypatch.delenv("SIGNTRANSLATOR_LANGUAGE", raising=False)
    monkeypatch.delenv("SIGNTRANSLATOR_METHOD", raising=False)
    monkeypatch.delenv("SIGNTRANSLATOR_LOG_LEVEL", raising=False)
    _clear_caches()
    yield tmp_path
    _clear_caches()
    packages_logger = logging.getLogger("packages")
    packages_logger.handlers.clear()
    packages_logger.setLevel(logging.NOTSET)


@pytest.fixture
def saved_entries():
    """Two entries written to the temp history, newest first."""
    history = cli_config.get_history()
    history.add(HistoryEntry(id=1, time="2026-03-01 09:00:00", translation="Hallo", confidence=0.9, method="s2g_greedy_g2t"))
    history.add(HistoryEntry(id=2, time="2026-03-01 09:05:00", translation="Danke", confidence=0.4, method=""))
    return history
