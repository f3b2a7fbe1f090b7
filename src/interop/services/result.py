"""Result envelope returned by every interop service.

``InvocationService``, ``CatalogService`` and ``ValidationService`` never
raise for expected failures; engine errors are folded into a
:class:`ServiceResult`.  ``AppContext.emit`` maps it to output and exit
codes, and the MCP tools turn it into a ``{ok, op, data, ...}`` dict.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Error half of a failed result.

    ``code`` is an :class:`~interop.domain.errors.ErrorCode` value;
    ``detail`` names the offending command, argument, path or hook.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: False when the run was rejected, aborted, or the main process failed.
        op: Operation name (``"run"``, ``"list_commands"``, ``"validate"``...).
        data: Operation payload.  For ``run`` this is the invocation record,
            present whether or not the command succeeded.
        warnings: Post-hook failures, ignored ``project_path`` values and
            non-blocking configuration issues.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
