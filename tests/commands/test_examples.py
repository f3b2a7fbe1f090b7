"""Tests for the --examples flag and help output on every command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from interop.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["interop command list", "interop run build"]),
    (["run", "--examples"], ["env=staging", "--project-path"]),
    (["command", "--examples"], ["interop command list --enabled"]),
    (["command", "list", "--examples"], ["--json command list"]),
    (["project", "--examples"], ["interop project commands api"]),
    (["project", "list", "--examples"], ["interop project list"]),
    (["project", "commands", "--examples"], ["-q project commands"]),
    (["validate", "--examples"], ["interop validate"]),
    (["edit", "--examples"], ["EDITOR=nano"]),
    (["serve", "--examples"], ["--server ops", "--transport sse"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples") or "root"


@pytest.mark.usefixtures("home")
@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.usefixtures("home")
@pytest.mark.parametrize(
    "args",
    [
        ["--help"],
        ["run", "--help"],
        ["command", "list", "--help"],
        ["project", "commands", "--help"],
        ["validate", "--help"],
        ["edit", "--help"],
        ["serve", "--help"],
    ],
    ids=lambda args: "_".join(a for a in args if a != "--help") or "root",
)
def test_help_mentions_examples(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "--examples" in result.output
