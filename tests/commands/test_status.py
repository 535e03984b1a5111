"""Tests for the status and check commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from taxctl.cli import cli
from taxctl.config.settings import TaxSettings


@pytest.mark.usefixtures("_isolated_workspace")
class TestStatusCommand:
    def test_fresh(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "status"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["needs_setup"] is True
        assert data["domains"] == 0

    def test_human(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "A", "B", "C"])
        result = cli_runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "root_domains: 3" in result.output

    def test_unreadable_database(self, cli_runner: CliRunner, settings: TaxSettings) -> None:
        settings.db_path.parent.mkdir(parents=True, exist_ok=True)
        settings.db_path.write_bytes(b"this is not sqlite" * 100)

        result = cli_runner.invoke(cli, ["--sync", "status"])
        assert result.exit_code == 0, result.output
        assert result.exception is None
        assert "needs_setup: True" in result.output
        assert "WARNING: Failed to load saved data" in result.output


@pytest.mark.usefixtures("_isolated_workspace")
class TestCheckCommand:
    def test_clean(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "A", "B", "C"])
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "no issues found" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert json.loads(result.output)["data"]["count"] == 0
