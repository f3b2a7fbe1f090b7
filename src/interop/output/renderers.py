"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from interop.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from interop.services.result import ServiceResult

_OK_MARK = "[interop.ok]ok[/interop.ok]"
_FAIL_MARK = "[interop.error]fail[/interop.error]"
_DISABLED_MARK = "[interop.disabled]disabled[/interop.disabled]"


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["name"]) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="interop.ok")
    op = Text(f"  {result.op}", style="interop.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="interop.key")
    if key in ("name", "invoked_as"):
        v = Text(str(value), style="interop.name")
    elif key in ("path", "cwd", "executable"):
        v = Text(str(value), style="interop.path")
    elif key == "command":
        v = Text(str(value), style="interop.command")
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_hooks(console: Console, hooks: list[dict[str, Any]]) -> None:
    if not hooks:
        return
    console.print(Text("  hooks:", style="interop.key"))
    for hook in hooks:
        mark = _OK_MARK if hook.get("ok") else _FAIL_MARK
        line = f"    {hook.get('phase')}#{int(hook.get('index', 0)) + 1} {mark}"
        console.print(line, Text(f" {hook.get('command', '')}"), end="")
        console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="interop.error")
    op = Text(f"  {result.op}", style="interop.op")
    console.print(label, op, Text(": "), Text(msg))

    issues = result.data.get("issues")
    if result.op == "validate" and issues:
        _render_issues(console, issues, verbose=verbose)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose and result.op == "run":
        _render_hooks(console, result.data.get("hooks", []))


# ── Run ───────────────────────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a completed invocation."""
    _status_line(console, result)
    d = result.data
    keys = ["invoked_as", "kind", "project", "command", "cwd", "exit_code"]
    if verbose:
        keys += ["name", "mode", "executable", "outcome"]
    for key in keys:
        if d.get(key) is not None:
            _field(console, key, d[key])
    if verbose and d.get("arguments"):
        _field(console, "arguments", json.dumps(d["arguments"], separators=(",", ":")))
    _render_hooks(console, d.get("hooks", []))
    output = d.get("output")
    if output:
        console.print()
        console.print(Text(output.rstrip("\n")))


# ── Listings ──────────────────────────────────────────────────────────


def _render_list_commands(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render all commands as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="interop.name", no_wrap=True)
    table.add_column("Status")
    table.add_column("Type")
    table.add_column("Description")
    table.add_column("Projects")
    if verbose:
        table.add_column("Command", style="interop.command")

    for item in items:
        status = "enabled" if item.get("enabled") else _DISABLED_MARK
        kind = "executable" if item.get("executable") else "shell"
        projects = ", ".join(
            f"{p['project']} ({p['alias']})" if p.get("alias") else str(p["project"])
            for p in item.get("projects", [])
        )
        row = [
            escape(str(item.get("name", ""))),
            status,
            kind,
            escape(str(item.get("description", ""))),
            escape(projects),
        ]
        if verbose:
            row.append(escape(str(item.get("cmd", ""))))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} commands")


def _render_list_projects(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render projects with path health."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="interop.name", no_wrap=True)
    table.add_column("Path", style="interop.path")
    table.add_column("Description")
    table.add_column("Commands", justify="right")
    table.add_column("Status")

    for item in items:
        problems: list[str] = []
        if not item.get("exists"):
            problems.append("[interop.error]missing[/interop.error]")
        if not item.get("in_home"):
            problems.append("[interop.warning]outside $HOME[/interop.warning]")
        status = ", ".join(problems) or "[interop.ok]ok[/interop.ok]"
        table.add_row(
            escape(str(item.get("name", ""))),
            escape(str(item.get("path", ""))),
            escape(str(item.get("description", ""))),
            str(item.get("commands", 0)),
            status,
        )

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} projects")


def _render_project_commands(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    console.print(
        Text(str(d.get("project", "")), style="interop.name"),
        Text(f"  {d.get('path', '')}", style="interop.path"),
    )
    items = d.get("items", [])
    if not items:
        console.print("  (no commands)")
        return
    for item in items:
        alias = f" (alias: {escape(item['alias'])})" if item.get("alias") else ""
        desc = f"  {escape(item['description'])}" if item.get("description") else ""
        if not item.get("defined"):
            desc = "  [interop.error]undefined command[/interop.error]"
        elif not item.get("enabled"):
            desc += "  [interop.disabled]disabled[/interop.disabled]"
        name = escape(str(item.get("name", "")))
        console.print(f"  [interop.name]{name}[/interop.name]{alias}{desc}")


# ── Validation ────────────────────────────────────────────────────────


def _render_issues(
    console: Console, issues: list[dict[str, Any]], *, verbose: bool = False
) -> None:
    """Print issues grouped by category, then an error/warning tally."""
    severity_styles = {"error": "interop.error", "warning": "interop.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_category.setdefault(str(issue.get("category", "unknown")), []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            subject = escape(f" [{issue['subject']}]") if verbose and issue.get("subject") else ""
            console.print(f"  {prefix}{subject}: ", Text(str(issue.get("message", ""))), sep="")

    errors = sum(1 for i in issues if i.get("severity") == "error")
    console.print(f"\n{errors} errors, {len(issues) - errors} warnings")


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    issues = result.data.get("issues", [])
    if not issues:
        console.print("[interop.ok]OK[/interop.ok]  No issues found.")
        return
    _render_issues(console, issues, verbose=verbose)


# ── Fallback ──────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "run": _render_run,
    "list_commands": _render_list_commands,
    "list_projects": _render_list_projects,
    "project_commands": _render_project_commands,
    "validate": _render_validate,
}
