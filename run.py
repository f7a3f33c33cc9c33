"""Uvicorn launcher for the interaction plugin server.

Usage:
    python run.py              # development (reload enabled)
    python run.py --no-reload  # production-like
"""

import sys

import uvicorn

from interaction_plugin.core.config import settings

if __name__ == "__main__":
    reload = "--no-reload" not in sys.argv
    uvicorn.run(
        "interaction_plugin.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
    )
