"""Plugin server application.

Serves the interaction action plugin to the workflow host over HTTP.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from interaction_plugin import __version__
from interaction_plugin.api.v1.api import api_router
from interaction_plugin.core.config import settings
from interaction_plugin.core.executions import create_status_service
from interaction_plugin.core.logging import logger
from interaction_plugin.core.plugins import InteractionPlugin
from interaction_plugin.core.plugins.base import ActionPlugin


def create_app(plugin: Optional[ActionPlugin] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        plugin: Plugin to serve. When omitted, an InteractionPlugin backed by
            the configured status service is created on startup.

    Returns:
        FastAPI: The application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_plugin = plugin is None
        app.state.plugin = plugin or InteractionPlugin(create_status_service())
        logger.info(
            "plugin_server_started",
            project=settings.PROJECT_NAME,
            environment=settings.ENVIRONMENT,
            version=__version__,
        )
        try:
            yield
        finally:
            if owns_plugin:
                await app.state.plugin.status_service.close()
            logger.info("plugin_server_stopped")

    app = FastAPI(title=settings.PROJECT_NAME, version=__version__, lifespan=lifespan)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
