"""Execution Status Service clients.

The plugin reads and writes step records, and flips the parent execution's
status, through one of these backends:
- HTTP (the workflow backend's REST API)
- In-memory (local runs and tests)
"""

from typing import Optional

from interaction_plugin.core.config import (
    Settings,
    settings,
)
from interaction_plugin.core.executions.base import ExecutionStatusService
from interaction_plugin.core.executions.http import HTTPStatusService
from interaction_plugin.core.executions.memory import InMemoryStatusService
from interaction_plugin.core.logging import logger

SERVICE_REGISTRY: dict[str, type] = {
    "http": HTTPStatusService,
    "memory": InMemoryStatusService,
}


def create_status_service(config: Optional[Settings] = None) -> ExecutionStatusService:
    """Build the status service client selected by ``STATUS_SERVICE_BACKEND``.

    Args:
        config: Settings to build from. Defaults to the process settings.

    Returns:
        A configured ExecutionStatusService.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    config = config or settings
    backend = config.STATUS_SERVICE_BACKEND
    service_cls = SERVICE_REGISTRY.get(backend)
    if service_cls is None:
        raise ValueError(f"Unknown status service backend '{backend}'")

    service = service_cls(name=backend, config=config.status_service_config())
    logger.info("status_service_created", backend=backend, type=service_cls.__name__)
    return service


__all__ = [
    "SERVICE_REGISTRY",
    "ExecutionStatusService",
    "HTTPStatusService",
    "InMemoryStatusService",
    "create_status_service",
]
