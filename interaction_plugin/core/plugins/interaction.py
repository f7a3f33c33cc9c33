"""Interaction action: hold a workflow step until a human approves or rejects it.

The step is marked as waiting, the execution is flagged as needing
interaction, and the step record is polled until the reviewer's decision
shows up or the configured timeout auto-approves it.
"""

import asyncio
import time
from datetime import (
    datetime,
    timezone,
)
from typing import (
    Awaitable,
    Callable,
    Optional,
)

from interaction_plugin import __version__
from interaction_plugin.core.config import settings
from interaction_plugin.core.exceptions import (
    ActionNotImplementedError,
    StatusServiceError,
)
from interaction_plugin.core.executions.base import ExecutionStatusService
from interaction_plugin.core.logging import logger
from interaction_plugin.core.plugins.base import ActionPlugin
from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStep,
    StepPatch,
    StepStatus,
)
from interaction_plugin.schemas.plugin import (
    ActionDefinition,
    AlertHandlerRequest,
    ExecuteTaskRequest,
    ParamDefinition,
    PluginInfo,
    PluginResponse,
)

TIMEOUT_PARAM = "Timeout"

PLUGIN_INFO = PluginInfo(
    name="Interaction",
    type="action",
    version=__version__,
    author="JustNZ",
    action=ActionDefinition(
        name="Interaction",
        description="Wait for user interaction to continue",
        plugin="interaction",
        icon="solar:hand-shake-linear",
        category="Utility",
        params=[
            ParamDefinition(
                key=TIMEOUT_PARAM,
                type="number",
                default="0",
                required=True,
                description="Continue to the next step after the specified time (in seconds). 0 to disable",
            ),
        ],
    ),
)


def parse_timeout(value: Optional[str]) -> int:
    """Coerce the Timeout parameter to whole seconds.

    Missing, unparsable and negative values all mean "never time out" (0).
    """
    if value is None:
        return 0
    text = str(value).strip()
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not (digits.isascii() and digits.isdigit()):
        return 0
    return max(int(text), 0)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InteractionPlugin(ActionPlugin):
    """Waits for a reviewer's decision on a step.

    Polls the step every ``poll_interval`` seconds. The timeout is checked
    once per poll against the instant polling started, so auto-approval
    lands on the first poll at or after the timeout, not exactly on it.
    """

    def __init__(
        self,
        status_service: ExecutionStatusService,
        poll_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the interaction plugin.

        Args:
            status_service: Client for the service that stores executions and steps.
            poll_interval: Seconds between step polls. Defaults to ``POLL_INTERVAL_SECONDS``.
            clock: Monotonic clock used to measure the timeout.
            sleep: Coroutine used to wait between polls.
        """
        super().__init__(status_service)
        self.poll_interval = settings.POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        self._clock = clock
        self._sleep = sleep

    async def execute_task(self, request: ExecuteTaskRequest) -> PluginResponse:
        """Drive the step from waiting to a terminal outcome.

        Returns:
            PluginResponse: ``success=True`` on approval (by a reviewer or by
            timeout), ``success=False`` with ``data={"status": "canceled"}``
            on rejection.

        Raises:
            StatusServiceError: If any step read or write fails. Nothing
                further is written once that happens.
        """
        execution = request.execution
        step = request.step
        timeout = parse_timeout(step.action.get_param(TIMEOUT_PARAM))
        log = logger.bind(execution_id=execution.id, step_id=step.id)

        try:
            await self.status_service.update_step(
                execution.id,
                StepPatch(
                    id=step.id,
                    messages=["Waiting for user interaction", f"Timeout: {timeout} seconds"],
                    status=StepStatus.INTERACTION_WAITING,
                    interactive=True,
                    started_at=_utcnow(),
                ),
            )
            log.info("interaction_step_waiting", timeout=timeout)

            await self._set_execution_status(self.status_service.set_to_interaction_required, execution)

            step_data = await self._wait_for_interaction(execution, step, timeout)

            await self._set_execution_status(self.status_service.set_to_running, execution)

            return await self._finalize(execution, step_data)
        except StatusServiceError as e:
            log.error("interaction_step_failed", operation=e.operation, error=str(e))
            raise

    async def _wait_for_interaction(self, execution: Execution, step: ExecutionStep, timeout: int) -> ExecutionStep:
        """Poll the step until it is interacted with or the timeout auto-approves it."""
        started = self._clock()
        polls = 0
        while True:
            step_data = await self.status_service.get_step(execution.id, step.id)
            polls += 1

            if step_data.interacted:
                logger.debug("interaction_detected", execution_id=execution.id, step_id=step.id, polls=polls)
                return step_data

            if timeout > 0 and self._clock() - started >= timeout:
                await self.status_service.update_step(
                    execution.id,
                    StepPatch(
                        id=step.id,
                        messages=["Interaction timed out", "Automatically approved & continuing to the next step"],
                        status=StepStatus.SUCCESS,
                        finished_at=_utcnow(),
                        interacted=True,
                        interaction_approved=True,
                        interaction_rejected=False,
                    ),
                )
                logger.info(
                    "interaction_timed_out",
                    execution_id=execution.id,
                    step_id=step.id,
                    timeout=timeout,
                    polls=polls,
                )
                return step_data.model_copy(
                    update={"interacted": True, "interaction_approved": True, "interaction_rejected": False}
                )

            await self._sleep(self.poll_interval)

    async def _finalize(self, execution: Execution, step_data: ExecutionStep) -> PluginResponse:
        """Persist the terminal step state for the decision and build the host response."""
        if step_data.interaction_rejected:
            await self.status_service.update_step(
                execution.id,
                StepPatch(
                    id=step_data.id,
                    messages=["Interaction rejected", "Execution canceled"],
                    status=StepStatus.CANCELED,
                    finished_at=_utcnow(),
                    interacted=True,
                    interaction_rejected=True,
                    interaction_approved=False,
                ),
            )
            logger.info("interaction_rejected", execution_id=execution.id, step_id=step_data.id)
            return PluginResponse(success=False, data={"status": StepStatus.CANCELED.value})

        if step_data.interaction_approved:
            await self.status_service.update_step(
                execution.id,
                StepPatch(
                    id=step_data.id,
                    messages=["Interaction approved"],
                    status=StepStatus.SUCCESS,
                    finished_at=_utcnow(),
                    interacted=True,
                    interaction_rejected=False,
                    interaction_approved=True,
                ),
            )
            logger.info("interaction_approved", execution_id=execution.id, step_id=step_data.id)
            return PluginResponse(success=True)

        # Interacted without a decision flag; let the workflow continue
        logger.warning("interaction_without_decision", execution_id=execution.id, step_id=step_data.id)
        return PluginResponse(success=True)

    async def _set_execution_status(
        self,
        flip: Callable[[Execution], Awaitable[None]],
        execution: Execution,
    ) -> None:
        """Flip the execution status. A failure here is logged and does not stop the step."""
        try:
            await flip(execution)
        except StatusServiceError as e:
            logger.warning(
                "execution_status_update_failed",
                execution_id=execution.id,
                operation=e.operation,
                error=str(e),
            )

    async def handle_alert(self, request: AlertHandlerRequest) -> PluginResponse:
        """Alerts cannot trigger an interaction step.

        Raises:
            ActionNotImplementedError: Always.
        """
        logger.warning("interaction_alert_unsupported", plugin=request.plugin)
        raise ActionNotImplementedError()

    def info(self) -> PluginInfo:
        """Return the static Interaction descriptor."""
        return PLUGIN_INFO
