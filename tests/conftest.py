"""Shared test fixtures for the test suite."""

from typing import (
    Callable,
    List,
    Optional,
    Tuple,
)

import pytest

from interaction_plugin.core.exceptions import StatusServiceError
from interaction_plugin.core.executions.memory import InMemoryStatusService
from interaction_plugin.core.plugins.interaction import InteractionPlugin
from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStep,
    StepAction,
    StepPatch,
)
from interaction_plugin.schemas.plugin import ExecuteTaskRequest

EXECUTION_ID = "exec-1"
STEP_ID = "step-1"


class FakeClock:
    """Monotonic clock that only moves when the plugin sleeps.

    Callbacks registered with ``at`` run once the clock reaches their time,
    standing in for a reviewer acting while the plugin waits.
    """

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []
        self._scheduled: List[Tuple[float, Callable[[], None]]] = []

    def __call__(self) -> float:
        return self.now

    def at(self, when: float, action: Callable[[], None]) -> None:
        self._scheduled.append((when, action))

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        due = [item for item in self._scheduled if item[0] <= self.now]
        self._scheduled = [item for item in self._scheduled if item[0] > self.now]
        for _, action in due:
            action()


class RecordingStatusService(InMemoryStatusService):
    """In-memory service that records every write and can fail a chosen update."""

    def __init__(self, fail_update_at: Optional[int] = None):
        super().__init__()
        self.patches: List[StepPatch] = []
        self.execution_statuses: List[str] = []
        self.fail_update_at = fail_update_at

    async def update_step(self, execution_id: str, patch: StepPatch) -> None:
        if self.fail_update_at is not None and len(self.patches) == self.fail_update_at:
            raise StatusServiceError("update_step", "backend unavailable", status=503)
        self.patches.append(patch)
        await super().update_step(execution_id, patch)

    async def set_to_interaction_required(self, execution: Execution) -> None:
        await super().set_to_interaction_required(execution)
        self.execution_statuses.append(self.get_execution(execution.id).status.value)

    async def set_to_running(self, execution: Execution) -> None:
        await super().set_to_running(execution)
        self.execution_statuses.append(self.get_execution(execution.id).status.value)


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def status_service() -> RecordingStatusService:
    """Create a recording status service holding one execution and one fresh step."""
    service = RecordingStatusService()
    service.add_execution(Execution(id=EXECUTION_ID))
    service.add_step(EXECUTION_ID, ExecutionStep(id=STEP_ID))
    return service


@pytest.fixture
def plugin(status_service, clock) -> InteractionPlugin:
    """Create an InteractionPlugin driven by the fake clock."""
    return InteractionPlugin(status_service, poll_interval=5, clock=clock, sleep=clock.sleep)


@pytest.fixture
def make_request() -> Callable[..., ExecuteTaskRequest]:
    """Build execute requests for the fixture execution and step."""

    def _make(timeout: Optional[str] = "0") -> ExecuteTaskRequest:
        params = {} if timeout is None else {"Timeout": timeout}
        return ExecuteTaskRequest(
            execution=Execution(id=EXECUTION_ID),
            step=ExecutionStep(id=STEP_ID, action=StepAction(name="Interaction", params=params)),
        )

    return _make
