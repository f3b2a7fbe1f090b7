"""Error codes and exception types raised by the invocation engine.

Engine internals raise :class:`InteropError` subclasses.  Service methods
catch them at their boundary and convert them into failed
:class:`~interop.services.result.ServiceResult` objects via
:meth:`InteropError.to_service_error`, so callers never see raw exceptions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from interop.services.result import ServiceError


class ErrorCode(StrEnum):
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    COMMAND_DISABLED = "COMMAND_DISABLED"
    EMPTY_COMMAND_TEMPLATE = "EMPTY_COMMAND_TEMPLATE"
    ARGUMENT_VALIDATION_FAILED = "ARGUMENT_VALIDATION_FAILED"
    EXECUTABLE_NOT_FOUND = "EXECUTABLE_NOT_FOUND"
    EXECUTABLE_NOT_PERMITTED = "EXECUTABLE_NOT_PERMITTED"
    WORKING_DIRECTORY_MISSING = "WORKING_DIRECTORY_MISSING"
    PRE_HOOK_FAILED = "PRE_HOOK_FAILED"
    POST_HOOK_FAILED = "POST_HOOK_FAILED"
    PROCESS_EXECUTION_FAILED = "PROCESS_EXECUTION_FAILED"
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"


class InteropError(Exception):
    """Base exception carrying a stable code and structured detail."""

    code: ErrorCode = ErrorCode.PROCESS_EXECUTION_FAILED

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail

    def to_service_error(self) -> ServiceError:
        from interop.services.result import ServiceError

        return ServiceError(code=str(self.code), message=self.message, detail=self.detail)


class CommandNotFoundError(InteropError):
    code = ErrorCode.COMMAND_NOT_FOUND


class CommandDisabledError(InteropError):
    code = ErrorCode.COMMAND_DISABLED


class EmptyCommandTemplateError(InteropError):
    code = ErrorCode.EMPTY_COMMAND_TEMPLATE


class ArgumentValidationError(InteropError):
    code = ErrorCode.ARGUMENT_VALIDATION_FAILED


class ExecutableNotFoundError(InteropError):
    code = ErrorCode.EXECUTABLE_NOT_FOUND


class ExecutableNotPermittedError(InteropError):
    code = ErrorCode.EXECUTABLE_NOT_PERMITTED


class WorkingDirectoryMissingError(InteropError):
    code = ErrorCode.WORKING_DIRECTORY_MISSING


class PreHookFailedError(InteropError):
    code = ErrorCode.PRE_HOOK_FAILED


class ProcessExecutionError(InteropError):
    code = ErrorCode.PROCESS_EXECUTION_FAILED


class ConfigurationInvalidError(InteropError):
    code = ErrorCode.CONFIGURATION_INVALID


class ProjectNotFoundError(InteropError):
    code = ErrorCode.PROJECT_NOT_FOUND
