"""Base interface for Execution Status Service clients."""

from abc import ABC, abstractmethod
from typing import Any

from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStep,
    StepPatch,
)


class ExecutionStatusService(ABC):
    """Abstract client for the service that stores executions and their steps.

    Every implementation must provide:
    - update_step(): partial update of a step record
    - get_step(): current snapshot of a step record
    - set_to_interaction_required() / set_to_running(): coarse execution flips

    Failures are raised as ``StatusServiceError``.
    """

    def __init__(self, name: str, config: dict[str, Any]):
        """Initialize the client.

        Args:
            name: Backend name for identification in logs.
            config: Backend-specific configuration dictionary.
        """
        self.name = name
        self.config = config

    @abstractmethod
    async def update_step(self, execution_id: str, patch: StepPatch) -> None:
        """Apply a partial update to a step. Unset patch fields stay untouched."""

    @abstractmethod
    async def get_step(self, execution_id: str, step_id: str) -> ExecutionStep:
        """Fetch the current snapshot of a step."""

    @abstractmethod
    async def set_to_interaction_required(self, execution: Execution) -> None:
        """Mark the execution as waiting on a human interaction."""

    @abstractmethod
    async def set_to_running(self, execution: Execution) -> None:
        """Mark the execution as running again."""

    async def close(self) -> None:
        """Optional cleanup hook. Override if needed."""

    def __repr__(self) -> str:
        """Return a string representation of the client."""
        return f"<{self.__class__.__name__} name={self.name!r}>"
