"""HTTP client for the Execution Status Service REST API."""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from interaction_plugin.core.exceptions import StatusServiceError
from interaction_plugin.core.executions.base import ExecutionStatusService
from interaction_plugin.core.logging import logger
from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStatus,
    ExecutionStep,
    StepPatch,
)


class HTTPStatusService(ExecutionStatusService):
    """Talks to the backend that stores executions and steps.

    Config keys:
        base_url: Backend URL (e.g. "http://backend:8080")
        api_key: Credential sent with every request
        auth_header: Auth header name (default: "Authorization")
        auth_prefix: Auth value prefix, empty for a bare key (default: "")
        timeout: Request timeout in seconds (default: 30)
        extra_headers: Additional HTTP headers dict
        transport: Optional ``httpx.AsyncBaseTransport`` to route requests through
    """

    def __init__(self, name: str, config: dict[str, Any]):
        """Initialize HTTPStatusService with config."""
        super().__init__(name, config)
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            base_url = self.config.get("base_url", "")
            api_key = self.config.get("api_key", "")
            auth_header = self.config.get("auth_header", "Authorization")
            auth_prefix = self.config.get("auth_prefix", "")
            extra_headers = self.config.get("extra_headers", {})

            headers = {"Content-Type": "application/json", **extra_headers}
            if api_key:
                headers[auth_header] = f"{auth_prefix} {api_key}".strip()

            self._client = httpx.AsyncClient(
                base_url=base_url,
                headers=headers,
                timeout=self.config.get("timeout", 30),
                transport=self.config.get("transport"),
            )
            logger.info("status_service_client_initialized", base_url=base_url, backend=self.name)
        return self._client

    async def _request(self, operation: str, method: str, url: str, body: Optional[dict] = None) -> httpx.Response:
        try:
            resp = await self._get_client().request(method, url, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.exception(
                "status_service_request_rejected",
                operation=operation,
                url=url,
                status=e.response.status_code,
            )
            raise StatusServiceError(
                operation, f"HTTP {e.response.status_code} from {url}", status=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.exception("status_service_request_failed", operation=operation, url=url, error=str(e))
            raise StatusServiceError(operation, str(e) or e.__class__.__name__) from e
        return resp

    @staticmethod
    def _step_path(execution_id: str, step_id: str) -> str:
        return f"/api/v1/executions/{execution_id}/steps/{step_id}"

    async def update_step(self, execution_id: str, patch: StepPatch) -> None:
        """Send a partial step update."""
        await self._request("update_step", "PUT", self._step_path(execution_id, patch.id), patch.to_payload())

    async def get_step(self, execution_id: str, step_id: str) -> ExecutionStep:
        """Fetch a step snapshot. The body may be the step or ``{"step": {...}}``."""
        resp = await self._request("get_step", "GET", self._step_path(execution_id, step_id))
        try:
            data = resp.json()
            if isinstance(data, dict) and isinstance(data.get("step"), dict):
                data = data["step"]
            return ExecutionStep.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.exception("status_service_step_invalid", execution_id=execution_id, step_id=step_id)
            raise StatusServiceError("get_step", f"invalid step payload: {e}") from e

    async def _set_status(self, operation: str, execution: Execution, status: ExecutionStatus) -> None:
        await self._request(operation, "PUT", f"/api/v1/executions/{execution.id}", {"status": status.value})

    async def set_to_interaction_required(self, execution: Execution) -> None:
        """Flip the execution to ``interactionWaiting``."""
        await self._set_status("set_to_interaction_required", execution, ExecutionStatus.INTERACTION_WAITING)

    async def set_to_running(self, execution: Execution) -> None:
        """Flip the execution back to ``running``."""
        await self._set_status("set_to_running", execution, ExecutionStatus.RUNNING)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
