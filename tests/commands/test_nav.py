"""Tests for the nav command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from taxctl.cli import cli


@pytest.fixture
def grown(cli_runner: CliRunner, _isolated_workspace: None) -> CliRunner:
    for args in (
        ["init", "Physics", "Biology", "Chemistry"],
        ["domain", "add", "Optics", "--at", "Physics"],
        ["domain", "add", "Lasers", "--at", "Physics/Optics"],
    ):
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
    return cli_runner


class TestNav:
    def test_show_home(self, grown: CliRunner) -> None:
        result = grown.invoke(cli, ["nav", "show"])
        assert result.exit_code == 0
        assert "Home[0]" in result.output
        assert "Chemistry" in result.output

    def test_select_persists_between_runs(self, grown: CliRunner) -> None:
        grown.invoke(cli, ["nav", "select", "Physics"])
        grown.invoke(cli, ["nav", "select", "Optics"])
        result = grown.invoke(cli, ["--json", "nav", "show"])
        data = json.loads(result.output)["data"]
        assert data["path"] == "Physics/Optics"
        assert data["domains"] == ["Lasers"]

    def test_select_unknown(self, grown: CliRunner) -> None:
        result = grown.invoke(cli, ["nav", "select", "Optics"])
        assert result.exit_code == 1
        assert "No domain 'Optics'" in result.output

    def test_up(self, grown: CliRunner) -> None:
        grown.invoke(cli, ["nav", "go", "Physics/Optics/Lasers"])
        result = grown.invoke(cli, ["-q", "nav", "up", "1"])
        assert result.exit_code == 0
        assert result.output.split() == ["Optics"]

    def test_up_defaults_home(self, grown: CliRunner) -> None:
        grown.invoke(cli, ["nav", "go", "Physics/Optics"])
        result = grown.invoke(cli, ["--json", "nav", "up"])
        assert json.loads(result.output)["data"]["path"] == "/"

    def test_up_rejects_negative(self, grown: CliRunner) -> None:
        result = grown.invoke(cli, ["nav", "up", "--", "-1"])
        assert result.exit_code == 2

    def test_go_unknown(self, grown: CliRunner) -> None:
        result = grown.invoke(cli, ["--json", "nav", "go", "Physics/Nope"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"

    def test_max_depth_notice(self, grown: CliRunner) -> None:
        grown.invoke(cli, ["config", "set", "--max-depth", "1"])
        result = grown.invoke(cli, ["nav", "select", "Physics"])
        assert result.exit_code == 0
        assert "max depth 1 reached" in result.output
