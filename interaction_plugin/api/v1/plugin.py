"""Plugin endpoints the workflow host calls.

Exposes the action-plugin contract over HTTP: describe the plugin, run a
step, and handle an alert. Failed invocations return a ``PluginResponse``
with ``success=false`` and the error message, under a non-2xx status.
"""

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Request,
)
from fastapi.responses import JSONResponse

from interaction_plugin.core.exceptions import ActionError
from interaction_plugin.core.logging import logger
from interaction_plugin.core.plugins.base import ActionPlugin
from interaction_plugin.schemas.plugin import (
    AlertHandlerRequest,
    ExecuteTaskRequest,
    PluginInfo,
    PluginResponse,
)

router = APIRouter()


def get_plugin(request: Request) -> ActionPlugin:
    """Return the plugin instance the application serves."""
    plugin = getattr(request.app.state, "plugin", None)
    if plugin is None:
        raise HTTPException(status_code=503, detail="Plugin not initialized")
    return plugin


def _error_response(error: ActionError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.response.model_dump())


@router.get("/info", response_model=PluginInfo)
async def plugin_info(plugin: ActionPlugin = Depends(get_plugin)):
    """Describe the plugin for the host catalog.

    Returns:
        PluginInfo: The static plugin descriptor.
    """
    return plugin.info()


@router.post("/execute", response_model=PluginResponse)
async def execute_task(body: ExecuteTaskRequest, plugin: ActionPlugin = Depends(get_plugin)):
    """Run one step to completion. Blocks until the step reaches a terminal state.

    Args:
        body: The execution and step to run.
        plugin: The served plugin.

    Returns:
        PluginResponse: The step outcome.
    """
    logger.info("execute_task_received", execution_id=body.execution.id, step_id=body.step.id)
    try:
        return await plugin.execute_task(body)
    except ActionError as e:
        return _error_response(e)


@router.post("/alert", response_model=PluginResponse)
async def handle_alert(body: AlertHandlerRequest, plugin: ActionPlugin = Depends(get_plugin)):
    """Hand an alert to the plugin.

    Args:
        body: The alert payload.
        plugin: The served plugin.

    Returns:
        PluginResponse: The handling outcome.
    """
    try:
        return await plugin.handle_alert(body)
    except ActionError as e:
        return _error_response(e)
