"""Shared pytest fixtures and test helpers for taxctl tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from taxctl.config.settings import TaxSettings
from taxctl.infrastructure.database.engine import init_database
from taxctl.infrastructure.workspace import Workspace

ROOTS = ("Physics", "Biology", "Chemistry")


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TAXCTL_* environment out of the tests."""
    monkeypatch.delenv("TAXCTL_CONFIG", raising=False)
    monkeypatch.delenv("TAXCTL_TAXONOMY__DEFAULT_MAX_DEPTH", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace directory.

    This is the single source of truth for the workspace location.
    All workspace fixtures (workspace, _isolated_workspace) build on this.
    """
    return tmp_path


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "store" / "taxctl.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(workspace_root: Path) -> TaxSettings:
    return TaxSettings.from_cli(workspace_root=workspace_root, sync=True)


@pytest.fixture
def workspace(settings: TaxSettings) -> Workspace:
    """Opened workspace with no root domains yet (saves run inline)."""
    ws = Workspace(settings)
    ws.open()
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def seeded(workspace: Workspace) -> Workspace:
    """Workspace with the three ROOTS already set up."""
    from taxctl.services.domains import DomainService

    result = DomainService(workspace).setup(ROOTS)
    assert result.ok, result.error
    return workspace


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp workspace so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(workspace_root)


@pytest.fixture
def reopen(settings: TaxSettings) -> Iterator[Callable[[], Workspace]]:
    """Factory opening further Workspaces on the same storage."""
    opened: list[Workspace] = []

    def _open() -> Workspace:
        ws = Workspace(settings)
        ws.open()
        opened.append(ws)
        return ws

    try:
        yield _open
    finally:
        for ws in opened:
            ws.close()
