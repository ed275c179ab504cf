"""Shared pytest fixtures for localstore tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from localstore.config.settings import LocalStoreSettings
from localstore.infrastructure.database.engine import init_database
from localstore.infrastructure.store import Store
from localstore.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Undo what a CLI invocation leaves behind: log handlers and telemetry."""
    monkeypatch.delenv("LOCALSTORE_CONFIG", raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Temporary directory the store lives under."""
    return tmp_path


@pytest.fixture
def store(store_root: Path) -> Generator[Store]:
    """Store on a temp directory with default settings."""
    s = Store(LocalStoreSettings.from_cli(root=store_root))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_store(store_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp root so the CLI opens an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(store_root)
