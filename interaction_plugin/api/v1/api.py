"""API v1 router configuration.

This module sets up the main API router and includes the plugin router.
"""

from fastapi import APIRouter

from interaction_plugin import __version__
from interaction_plugin.api.v1.plugin import router as plugin_router
from interaction_plugin.core.logging import logger

api_router = APIRouter()

# Include routers
api_router.include_router(plugin_router, prefix="/plugin", tags=["plugin"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        dict: Health status information.
    """
    logger.debug("health_check_called")
    return {"status": "healthy", "plugin": "interaction", "version": __version__}
