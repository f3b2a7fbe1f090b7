"""Tests for the run command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from interop.cli import cli
from tests.conftest import FakeInvoker

CONFIG = """
[commands.build]
cmd = "make ${target}"
arguments = [{ name = "target", default = "all" }]

[commands.greet]
cmd = "echo hello"
post_exec = ["cleanup"]

[commands.off]
cmd = "true"
is_enabled = false
"""


@pytest.fixture(autouse=True)
def _config(config_file) -> None:
    config_file(CONFIG)


class TestRun:
    def test_success_is_silent(self, cli_runner: CliRunner, fake_runtime: FakeInvoker) -> None:
        result = cli_runner.invoke(cli, ["run", "build"])
        assert result.exit_code == 0
        assert result.stdout == ""
        assert fake_runtime.commands == ["make all"]
        assert fake_runtime.calls[0].capture is False

    def test_tokens_passed_through(
        self, cli_runner: CliRunner, fake_runtime: FakeInvoker
    ) -> None:
        result = cli_runner.invoke(cli, ["run", "build", "target=dist", "--keep-going"])
        assert result.exit_code == 0
        assert fake_runtime.commands == ["make dist --keep-going"]

    def test_json_envelope(self, cli_runner: CliRunner, fake_runtime: FakeInvoker) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", "build"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "run"
        assert payload["data"]["exit_code"] == 0
        assert payload["data"]["output"] == "ran: make all\n"

    def test_verbose_shows_record(
        self, cli_runner: CliRunner, fake_runtime: FakeInvoker
    ) -> None:
        result = cli_runner.invoke(cli, ["-v", "run", "build"])
        assert result.exit_code == 0
        assert "make all" in result.stdout

    def test_failure_exits_one(self, cli_runner: CliRunner, fake_runtime: FakeInvoker) -> None:
        fake_runtime.exit_codes["make"] = 2
        result = cli_runner.invoke(cli, ["run", "build"])
        assert result.exit_code == 1
        assert "exited with code 2" in result.stderr
        assert result.stdout == ""

    def test_unknown_command(self, cli_runner: CliRunner, fake_runtime: FakeInvoker) -> None:
        result = cli_runner.invoke(cli, ["run", "ghost"])
        assert result.exit_code == 1
        assert "ghost" in result.stderr
        assert fake_runtime.calls == []

    def test_disabled_command_json(
        self, cli_runner: CliRunner, fake_runtime: FakeInvoker
    ) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", "off"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "COMMAND_DISABLED"

    def test_post_hook_failure_warns(
        self, cli_runner: CliRunner, fake_runtime: FakeInvoker
    ) -> None:
        fake_runtime.exit_codes["cleanup"] = 1
        result = cli_runner.invoke(cli, ["run", "greet"])
        assert result.exit_code == 0
        assert "WARNING: post-execution hook 1 failed: cleanup" in result.stderr

    def test_name_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run"])
        assert result.exit_code == 2
