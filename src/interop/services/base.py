"""BaseService: shared foundation for interop services.

Every service receives the immutable :class:`InteropSettings` snapshot at
construction time.  Nothing in the service layer reads configuration from
anywhere else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interop.domain.errors import InteropError
from interop.services.result import ServiceResult

if TYPE_CHECKING:
    from interop.config.settings import InteropSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def list_commands(self) -> ServiceResult:
                commands = self._settings.commands
                ...
    """

    def __init__(self, settings: InteropSettings) -> None:
        self._settings = settings

    @staticmethod
    def _failure(
        op: str,
        exc: InteropError,
        *,
        data: dict | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Convert a raised engine error into a failed ServiceResult."""
        return ServiceResult(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=exc.to_service_error(),
        )
