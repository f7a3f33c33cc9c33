"""In-memory Execution Status Service.

Keeps executions and steps in process memory. Used for local runs without a
backend and in tests. It also plays the reviewer side: ``approve`` and
``reject`` set the interaction flags a human would set through the UI.
"""

from typing import (
    Any,
    Dict,
    Optional,
    Tuple,
)

from interaction_plugin.core.exceptions import StatusServiceError
from interaction_plugin.core.executions.base import ExecutionStatusService
from interaction_plugin.core.logging import logger
from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStatus,
    ExecutionStep,
    StepPatch,
)


class InMemoryStatusService(ExecutionStatusService):
    """Dict-backed status service.

    Steps must be added with ``add_step`` before a plugin can update them,
    the same way the host creates step records before invoking a plugin.
    """

    def __init__(self, name: str = "memory", config: Optional[dict[str, Any]] = None):
        """Initialize the in-memory store."""
        super().__init__(name, config or {})
        self._steps: Dict[Tuple[str, str], ExecutionStep] = {}
        self._executions: Dict[str, Execution] = {}

    def add_execution(self, execution: Execution) -> Execution:
        """Store an execution record."""
        self._executions[execution.id] = execution.model_copy()
        return self._executions[execution.id]

    def add_step(self, execution_id: str, step: ExecutionStep) -> ExecutionStep:
        """Store a step record under an execution."""
        self._steps[(execution_id, step.id)] = step.model_copy(deep=True)
        return self._steps[(execution_id, step.id)]

    def get_execution(self, execution_id: str) -> Optional[Execution]:
        """Get an execution record, or None if unknown."""
        return self._executions.get(execution_id)

    def _require_step(self, operation: str, execution_id: str, step_id: str) -> ExecutionStep:
        step = self._steps.get((execution_id, step_id))
        if step is None:
            raise StatusServiceError(operation, f"step '{step_id}' not found in execution '{execution_id}'", status=404)
        return step

    async def update_step(self, execution_id: str, patch: StepPatch) -> None:
        """Merge the explicitly-set patch fields into the stored step.

        Patch messages are appended to the step's message history.
        """
        step = self._require_step("update_step", execution_id, patch.id)
        changes = patch.model_dump(exclude_unset=True, exclude={"id"})
        if "messages" in changes:
            changes["messages"] = step.messages + (changes["messages"] or [])
        self._steps[(execution_id, patch.id)] = step.model_copy(update=changes)

    async def get_step(self, execution_id: str, step_id: str) -> ExecutionStep:
        """Return a copy of the stored step."""
        return self._require_step("get_step", execution_id, step_id).model_copy(deep=True)

    def _set_status(self, execution: Execution, status: ExecutionStatus) -> None:
        stored = self._executions.get(execution.id) or self.add_execution(execution)
        stored.status = status

    async def set_to_interaction_required(self, execution: Execution) -> None:
        """Flip the stored execution to ``interactionWaiting``."""
        self._set_status(execution, ExecutionStatus.INTERACTION_WAITING)

    async def set_to_running(self, execution: Execution) -> None:
        """Flip the stored execution to ``running``."""
        self._set_status(execution, ExecutionStatus.RUNNING)

    def _interact(self, execution_id: str, step_id: str, approved: bool) -> ExecutionStep:
        step = self._steps.get((execution_id, step_id))
        if step is None:
            raise KeyError(f"Step '{step_id}' not found in execution '{execution_id}'")

        if step.interacted:
            raise ValueError(f"Step '{step_id}' was already interacted with")

        self._steps[(execution_id, step_id)] = step.model_copy(
            update={
                "interacted": True,
                "interaction_approved": approved,
                "interaction_rejected": not approved,
            }
        )

        logger.info(
            "interaction_step_approved" if approved else "interaction_step_rejected",
            execution_id=execution_id,
            step_id=step_id,
        )

        return self._steps[(execution_id, step_id)]

    def approve(self, execution_id: str, step_id: str) -> ExecutionStep:
        """Approve a waiting step, as a reviewer would.

        Raises:
            KeyError: If the step is not found.
            ValueError: If the step was already interacted with.
        """
        return self._interact(execution_id, step_id, approved=True)

    def reject(self, execution_id: str, step_id: str) -> ExecutionStep:
        """Reject a waiting step, as a reviewer would.

        Raises:
            KeyError: If the step is not found.
            ValueError: If the step was already interacted with.
        """
        return self._interact(execution_id, step_id, approved=False)
