"""Tests for operation-specific renderers."""

from __future__ import annotations

from interop.output.renderers import render_result
from interop.services.result import ServiceError, ServiceResult


def _run_result(**overrides: object) -> ServiceResult:
    data = {
        "invoked_as": "b",
        "name": "build",
        "kind": "alias",
        "project": "api",
        "command": "make build",
        "cwd": "/home/u/code/api",
        "mode": "shell",
        "executable": None,
        "exit_code": 0,
        "outcome": "succeeded",
        "arguments": {"target": "all"},
        "hooks": [
            {"phase": "pre", "index": 0, "command": "echo pre", "ok": True, "exit_code": 0},
            {"phase": "post", "index": 0, "command": "echo post", "ok": False, "exit_code": 1},
        ],
    }
    data.update(overrides)
    return ServiceResult(ok=True, op="run", data=data)


class TestRenderRun:
    def test_fields(self) -> None:
        output = render_result(_run_result())
        assert "OK" in output
        assert "invoked_as: b" in output
        assert "command: make build" in output
        assert "pre#1 ok" in output
        assert "post#1 fail" in output
        assert "outcome" not in output

    def test_verbose_adds_detail(self) -> None:
        output = render_result(_run_result(), verbose=True)
        assert "outcome: succeeded" in output
        assert '{"target":"all"}' in output

    def test_captured_output_shown(self) -> None:
        output = render_result(_run_result(output="built [ok]\n"))
        assert "built [ok]" in output


class TestRenderError:
    def test_message(self) -> None:
        result = ServiceResult(
            ok=False,
            op="run",
            data={"hooks": []},
            error=ServiceError(
                code="COMMAND_NOT_FOUND",
                message="command or alias '[x]' not found",
                detail={"name": "[x]"},
            ),
        )
        assert "command or alias '[x]' not found" in render_result(result)
        assert "name: [x]" in render_result(result, verbose=True)


class TestRenderListings:
    def test_list_commands_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_commands",
            data={
                "items": [
                    {
                        "name": "build",
                        "description": "Build [fast]",
                        "cmd": "make",
                        "enabled": True,
                        "executable": False,
                        "projects": [{"project": "api", "alias": "b"}],
                    },
                    {
                        "name": "old",
                        "description": "",
                        "cmd": "x",
                        "enabled": False,
                        "executable": True,
                        "projects": [],
                    },
                ],
                "count": 2,
            },
        )
        output = render_result(result)
        assert "build" in output
        assert "Build [fast]" in output
        assert "api (b)" in output
        assert "disabled" in output
        assert "2 commands" in output

    def test_list_projects_health(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_projects",
            data={
                "items": [
                    {
                        "name": "api",
                        "path": "/tmp/api",
                        "description": "",
                        "exists": False,
                        "in_home": False,
                        "commands": 1,
                    }
                ],
                "count": 1,
            },
        )
        output = render_result(result)
        assert "missing" in output
        assert "outside $HOME" in output

    def test_project_commands(self) -> None:
        result = ServiceResult(
            ok=True,
            op="project_commands",
            data={
                "project": "api",
                "path": "/tmp/api",
                "items": [
                    {"name": "build", "alias": "b", "description": "Build", "enabled": True,
                     "defined": True},
                    {"name": "ghost", "alias": None, "description": "", "enabled": False,
                     "defined": False},
                ],
                "count": 2,
            },
        )
        output = render_result(result)
        assert "build (alias: b)" in output
        assert "undefined command" in output


class TestRenderValidate:
    def test_clean(self) -> None:
        result = ServiceResult(ok=True, op="validate", data={"issues": [], "count": 0})
        assert "No issues found" in render_result(result)

    def test_issues_grouped(self) -> None:
        issues = [
            {"category": "bindings", "severity": "error", "message": "bad one", "subject": "x"},
            {"category": "mcp_assignment", "severity": "warning", "message": "meh", "subject": ""},
        ]
        result = ServiceResult(
            ok=False,
            op="validate",
            data={"issues": issues},
            error=ServiceError(code="CONFIGURATION_INVALID", message="1 severe issue(s)"),
        )
        output = render_result(result, verbose=True)
        assert "bindings" in output
        assert "error [x]: bad one" in output
        assert "1 errors, 1 warnings" in output
