"""UML API routes — class diagrams for a directory of Java sources.

  POST /uml/generate → PlantUML source as JSON
  POST /uml/render   → rendered SVG or PNG
"""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import Response

from docloom.core.diagrams.renderer import SUPPORTED_FORMATS
from docloom.core.errors import InvalidInputError, RenderingError

from ..deps import get_diagram_service
from ..schemas import UMLSourceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uml", tags=["uml"])


@router.post("/generate", response_model=UMLSourceResponse, response_model_by_alias=True)
def generate_uml(
    directory_path: str = Form(..., alias="directoryPath"),
    diagram_service=Depends(get_diagram_service),
):
    """Generate the PlantUML class diagram source for a directory."""
    logger.info("Received request for directory: %s", directory_path)
    try:
        document = diagram_service.generate_source(directory_path)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return UMLSourceResponse(
        plant_uml=document.source,
        type_count=len(document.declarations),
        relationship_count=len(document.edges),
        warnings=[str(w) for w in document.warnings],
    )


@router.post("/render")
def render_uml(
    directory_path: str = Form(..., alias="directoryPath"),
    fmt: str = Form("svg", alias="format"),
    diagram_service=Depends(get_diagram_service),
):
    """Generate the class diagram for a directory and render it as an image."""
    logger.info("Received render request (%s) for directory: %s", fmt, directory_path)
    if fmt not in SUPPORTED_FORMATS:
        raise HTTPException(status_code=400, detail=f"Unsupported format: {fmt}. Supported: {list(SUPPORTED_FORMATS)}")
    try:
        image = diagram_service.render(directory_path, fmt)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RenderingError as e:
        logger.error("Error rendering UML for path %s: %s", directory_path, e)
        raise HTTPException(status_code=502, detail=str(e))

    return Response(content=image, media_type=diagram_service.media_type(fmt))
