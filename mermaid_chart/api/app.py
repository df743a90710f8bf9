"""FastAPI application factory for mermaid-chart.

Creates and configures the FastAPI app with CORS and all route
modules registered.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core import config
from ..core.diagrams import DiagramService

logger = logging.getLogger(__name__)


def create_app(diagram_service: Optional[DiagramService] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        diagram_service: DiagramService instance (default: a fresh one)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="mermaid-chart API",
        description="Source code structure to Mermaid class diagrams",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.diagram_service = diagram_service or DiagramService()

    from .routes.diagrams import router as diagrams_router

    app.include_router(diagrams_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "mermaid-chart"}

    logger.info("FastAPI app created with all routes registered")
    return app
