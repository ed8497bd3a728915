"""FastAPI application factory for docloom.

Creates and configures the FastAPI app with CORS and all route modules
registered.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docloom import __version__
from docloom.core.config import DocloomSettings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[DocloomSettings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration; loaded from config/docloom.yaml when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="docloom API",
        description="Javadoc generation and UML class diagrams for Java source trees",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store shared dependencies on app state
    app.state.settings = settings
    app.state.diagram_service = None
    app.state.javadoc_service = None

    # Register routers
    from .routes.javadoc import router as javadoc_router
    from .routes.uml import router as uml_router

    app.include_router(uml_router, prefix="/api")
    app.include_router(javadoc_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "docloom"}

    logger.info("FastAPI app created with all routes registered")
    return app
