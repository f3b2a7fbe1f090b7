"""CatalogService: read-only listings of commands and projects."""

from __future__ import annotations

from typing import Any

from interop.domain.errors import ProjectNotFoundError
from interop.infrastructure.paths import inspect_path
from interop.services.base import BaseService
from interop.services.result import ServiceResult


class CatalogService(BaseService):
    """Lists configured commands and projects, sorted by name."""

    def _associations(self) -> dict[str, list[dict[str, Any]]]:
        """command name -> [{project, alias}] across all projects."""
        assoc: dict[str, list[dict[str, Any]]] = {}
        for project_name, project in sorted(self._settings.projects.items()):
            for binding in project.commands:
                assoc.setdefault(binding.command_name, []).append(
                    {"project": project_name, "alias": binding.alias}
                )
        return assoc

    def list_commands(self, *, enabled_only: bool = False) -> ServiceResult:
        assoc = self._associations()
        items: list[dict[str, Any]] = []
        for name, cmd in sorted(self._settings.commands.items()):
            if enabled_only and not cmd.is_enabled:
                continue
            items.append(
                {
                    "name": name,
                    "description": cmd.description,
                    "cmd": cmd.cmd,
                    "enabled": cmd.is_enabled,
                    "executable": cmd.is_executable,
                    "mcp": cmd.mcp,
                    "arguments": [a.name for a in cmd.arguments],
                    "projects": assoc.get(name, []),
                }
            )
        return ServiceResult(
            ok=True,
            op="list_commands",
            data={"items": items, "count": len(items)},
        )

    def list_projects(self) -> ServiceResult:
        items: list[dict[str, Any]] = []
        for name, project in sorted(self._settings.projects.items()):
            info = inspect_path(project.path)
            items.append(
                {
                    "name": name,
                    "path": str(info.path),
                    "description": project.description,
                    "exists": info.exists,
                    "in_home": info.in_home,
                    "commands": len(project.commands),
                }
            )
        return ServiceResult(
            ok=True,
            op="list_projects",
            data={"items": items, "count": len(items)},
        )

    def project_commands(self, project_name: str) -> ServiceResult:
        """Commands bound to one project, in binding order."""
        project = self._settings.projects.get(project_name)
        if project is None:
            exc = ProjectNotFoundError(
                f"project '{project_name}' not found", project=project_name
            )
            return self._failure("project_commands", exc)

        items: list[dict[str, Any]] = []
        for binding in project.commands:
            cmd = self._settings.commands.get(binding.command_name)
            items.append(
                {
                    "name": binding.command_name,
                    "alias": binding.alias,
                    "description": cmd.description if cmd else "",
                    "enabled": cmd.is_enabled if cmd else False,
                    "defined": cmd is not None,
                }
            )
        return ServiceResult(
            ok=True,
            op="project_commands",
            data={
                "project": project_name,
                "path": str(inspect_path(project.path).path),
                "items": items,
                "count": len(items),
            },
        )
