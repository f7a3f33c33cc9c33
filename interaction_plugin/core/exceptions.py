"""Errors raised by action plugins and the status service clients."""

from typing import Optional

from interaction_plugin.schemas.plugin import PluginResponse


class ActionError(Exception):
    """Base error for a failed plugin invocation.

    Every action error maps to a failed ``PluginResponse`` so the serving
    layer can hand the host a structured result alongside the error.
    """

    status_code: int = 500

    @property
    def response(self) -> PluginResponse:
        """Return the failed response the host receives for this error."""
        return PluginResponse(success=False, error=str(self))


class StatusServiceError(ActionError):
    """A read or write against the Execution Status Service failed."""

    status_code = 502

    def __init__(self, operation: str, message: str, status: Optional[int] = None):
        """Initialize the error.

        Args:
            operation: Status service operation that failed (e.g. ``"update_step"``).
            message: Description of the failure.
            status: HTTP status returned by the service, if any.
        """
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.status = status


class ActionNotImplementedError(ActionError, NotImplementedError):
    """The invoked plugin operation is not supported by this action."""

    status_code = 501

    def __init__(self, message: str = "not implemented"):
        """Initialize the error with a fixed message."""
        super().__init__(message)
