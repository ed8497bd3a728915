"""FastAPI dependencies for docloom.

Provides shared services via FastAPI's Depends() injection system.
"""

import logging

from fastapi import Request

logger = logging.getLogger(__name__)


async def get_diagram_service(request: Request):
    """Get or create DiagramService from app state."""
    if getattr(request.app.state, "diagram_service", None) is None:
        from docloom.core.diagrams import DiagramService
        request.app.state.diagram_service = DiagramService(request.app.state.settings)
    return request.app.state.diagram_service


async def get_javadoc_service(request: Request):
    """Get or create JavadocService from app state."""
    if getattr(request.app.state, "javadoc_service", None) is None:
        from docloom.core.javadoc import JavadocService
        request.app.state.javadoc_service = JavadocService(request.app.state.settings.javadoc)
    return request.app.state.javadoc_service
