"""Base interface for action plugins served to the workflow host."""

from abc import ABC, abstractmethod

from interaction_plugin.core.executions.base import ExecutionStatusService
from interaction_plugin.schemas.plugin import (
    AlertHandlerRequest,
    ExecuteTaskRequest,
    PluginInfo,
    PluginResponse,
)


class ActionPlugin(ABC):
    """Abstract base class for action plugins.

    Every plugin must implement:
    - execute_task(): run one workflow step to completion
    - handle_alert(): react to an incoming alert, or refuse to
    - info(): static descriptor for the host catalog

    Failures are raised as ``ActionError`` subclasses; each one carries the
    failed ``PluginResponse`` the host should receive.
    """

    def __init__(self, status_service: ExecutionStatusService):
        """Initialize the plugin.

        Args:
            status_service: Client for the service that stores executions and steps.
        """
        self.status_service = status_service

    @abstractmethod
    async def execute_task(self, request: ExecuteTaskRequest) -> PluginResponse:
        """Run the step described by the request."""

    @abstractmethod
    async def handle_alert(self, request: AlertHandlerRequest) -> PluginResponse:
        """Handle an alert forwarded by the host."""

    @abstractmethod
    def info(self) -> PluginInfo:
        """Return the plugin descriptor."""

    def __repr__(self) -> str:
        """Return a string representation of the plugin."""
        return f"<{self.__class__.__name__} status_service={self.status_service!r}>"
