"""Tests for the domain command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from taxctl.cli import cli


@pytest.fixture
def initialized(cli_runner: CliRunner, _isolated_workspace: None) -> CliRunner:
    result = cli_runner.invoke(cli, ["init", "Physics", "Biology", "Chemistry"])
    assert result.exit_code == 0, result.output
    return cli_runner


class TestDomainAdd:
    def test_add_root(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["--json", "domain", "add", "Geology"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["level"] == 1

    def test_add_with_at(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["domain", "add", "Optics", "--at", "Physics"])
        assert result.exit_code == 0
        assert "Physics/Optics" in result.output

    def test_add_follows_cursor(self, initialized: CliRunner) -> None:
        initialized.invoke(cli, ["nav", "select", "Biology"])
        result = initialized.invoke(cli, ["-q", "domain", "add", "Genetics"])
        assert result.output.strip() == "Biology/Genetics"

    def test_add_at_root_slash(self, initialized: CliRunner) -> None:
        initialized.invoke(cli, ["nav", "select", "Biology"])
        result = initialized.invoke(cli, ["-q", "domain", "add", "Geology", "--at", "/"])
        assert result.output.strip() == "Geology"

    def test_duplicate(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["domain", "add", "Physics"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_unknown_parent(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["--json", "domain", "add", "X", "--at", "Nope/Deeper"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"

    def test_malformed_path(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["domain", "add", "X", "--at", "Physics//Optics"])
        assert result.exit_code == 2
        assert "empty domain name" in result.output

    def test_escaped_slash_in_path(self, initialized: CliRunner) -> None:
        initialized.invoke(cli, ["domain", "add", "AC/DC", "--at", "Physics"])
        result = initialized.invoke(cli, ["-q", "domain", "add", "Live", "--at", "Physics/AC\\/DC"])
        assert result.exit_code == 0
        assert result.output.strip() == "Physics/AC\\/DC/Live"

    def test_before_init(self, cli_runner: CliRunner, _isolated_workspace: None) -> None:
        result = cli_runner.invoke(cli, ["domain", "add", "X"])
        assert result.exit_code == 1
        assert "taxctl init" in result.output


class TestDomainList:
    def test_roots(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["-q", "domain", "list"])
        assert result.output.split() == ["Physics", "Biology", "Chemistry"]

    def test_path_argument(self, initialized: CliRunner) -> None:
        initialized.invoke(cli, ["domain", "add", "Optics", "--at", "Physics"])
        result = initialized.invoke(cli, ["--json", "domain", "list", "Physics"])
        data = json.loads(result.output)["data"]
        assert data["path"] == "Physics"
        assert [i["name"] for i in data["items"]] == ["Optics"]

    def test_table(self, initialized: CliRunner) -> None:
        result = initialized.invoke(cli, ["domain", "list"])
        assert result.exit_code == 0
        assert "Domain" in result.output
        assert "3 domains" in result.output


class TestDomainTree:
    def test_tree(self, initialized: CliRunner) -> None:
        initialized.invoke(cli, ["domain", "add", "Optics", "--at", "Physics"])
        result = initialized.invoke(cli, ["domain", "tree"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "Home"
        assert "Optics" in result.output
        assert "4 domains" in result.output
