"""Configuration validation.

Checks the loaded settings for problems the schema cannot express:
  - bindings that reference a missing command (severe)
  - a command bound without alias in more than one project (severe)
  - an alias reused across projects (severe)
  - a project path that does not exist (severe)
  - a project path outside the home directory (warning)
  - a command or prompt assigned to an undefined MCP server (warning)

Severe issues block every invocation; warnings are only reported.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from interop.config.models import DEFAULT_SERVER
from interop.domain.errors import ErrorCode
from interop.infrastructure.paths import inspect_path
from interop.services.base import BaseService
from interop.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_BINDINGS = "bindings"
CAT_ALIASES = "aliases"
CAT_PROJECT_PATHS = "project_paths"
CAT_MCP = "mcp_assignment"


class ValidationIssue(BaseModel):
    """One configuration problem."""

    model_config = {"frozen": True}

    category: str
    severity: str
    message: str
    subject: str = ""

    @property
    def severe(self) -> bool:
        return self.severity == SEVERITY_ERROR


def _issue(category: str, message: str, *, severe: bool, subject: str = "") -> ValidationIssue:
    return ValidationIssue(
        category=category,
        severity=SEVERITY_ERROR if severe else SEVERITY_WARNING,
        message=message,
        subject=subject,
    )


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def validate_bindings(settings: InteropSettings) -> list[ValidationIssue]:
    """Check binding targets, alias-less uniqueness, and alias uniqueness."""
    issues: list[ValidationIssue] = []
    used_commands: dict[str, str] = {}
    used_aliases: dict[str, str] = {}

    for project_name, project in sorted(settings.projects.items()):
        for binding in project.commands:
            if binding.command_name not in settings.commands:
                issues.append(
                    _issue(
                        CAT_BINDINGS,
                        f"Project '{project_name}' references non-existent command "
                        f"'{binding.command_name}'",
                        severe=True,
                        subject=binding.command_name,
                    )
                )
                continue

            if binding.alias is None:
                prev = used_commands.get(binding.command_name)
                if prev is not None:
                    issues.append(
                        _issue(
                            CAT_BINDINGS,
                            f"Command '{binding.command_name}' is bound to multiple projects "
                            f"('{prev}' and '{project_name}') without alias",
                            severe=True,
                            subject=binding.command_name,
                        )
                    )
                used_commands[binding.command_name] = project_name
            else:
                prev = used_aliases.get(binding.alias)
                if prev is not None:
                    issues.append(
                        _issue(
                            CAT_ALIASES,
                            f"Alias '{binding.alias}' is used in multiple projects "
                            f"('{prev}' and '{project_name}')",
                            severe=True,
                            subject=binding.alias,
                        )
                    )
                used_aliases[binding.alias] = project_name

    return issues


def validate_project_paths(
    settings: InteropSettings, *, home: Path | None = None
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name, project in sorted(settings.projects.items()):
        info = inspect_path(project.path, home=home)
        if not info.in_home:
            issues.append(
                _issue(
                    CAT_PROJECT_PATHS,
                    f"Project '{name}' path must be inside $HOME: {project.path}",
                    severe=False,
                    subject=name,
                )
            )
        if not info.exists:
            issues.append(
                _issue(
                    CAT_PROJECT_PATHS,
                    f"Project '{name}' path does not exist: {info.path}",
                    severe=True,
                    subject=name,
                )
            )
    return issues


def validate_mcp_assignments(settings: InteropSettings) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    known = {DEFAULT_SERVER, *settings.mcp_servers}
    for name, cmd in sorted(settings.commands.items()):
        if cmd.mcp and cmd.mcp not in known:
            issues.append(
                _issue(
                    CAT_MCP,
                    f"Command '{name}' is assigned to undefined MCP server '{cmd.mcp}'",
                    severe=False,
                    subject=name,
                )
            )
    for name, prompt in sorted(settings.prompts.items()):
        if prompt.mcp and prompt.mcp not in known:
            issues.append(
                _issue(
                    CAT_MCP,
                    f"Prompt '{name}' is assigned to undefined MCP server '{prompt.mcp}'",
                    severe=False,
                    subject=name,
                )
            )
    return issues


def validate_config(
    settings: InteropSettings, *, home: Path | None = None
) -> list[ValidationIssue]:
    """Run every configuration check and return the issues found."""
    issues = [
        *validate_bindings(settings),
        *validate_project_paths(settings, home=home),
        *validate_mcp_assignments(settings),
    ]
    for issue in issues:
        logger.debug("Config issue [%s] %s", issue.severity, issue.message)
    return issues


def severe_issues(issues: list[ValidationIssue]) -> list[ValidationIssue]:
    return [i for i in issues if i.severe]


# ---------------------------------------------------------------------------
# ValidationService
# ---------------------------------------------------------------------------


class ValidationService(BaseService):
    """Reports configuration issues for ``interop validate``."""

    def validate(self) -> ServiceResult:
        issues = validate_config(self._settings)
        errors = severe_issues(issues)
        data: dict[str, Any] = {
            "issues": [i.model_dump() for i in issues],
            "count": len(issues),
            "errors": len(errors),
            "warnings": len(issues) - len(errors),
        }
        if errors:
            return ServiceResult(
                ok=False,
                op="validate",
                data=data,
                error=ServiceError(
                    code=ErrorCode.CONFIGURATION_INVALID,
                    message=f"{len(errors)} severe configuration issue(s)",
                    detail={"issues": [i.message for i in errors]},
                ),
            )
        return ServiceResult(ok=True, op="validate", data=data)
