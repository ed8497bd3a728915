"""Javadoc API routes.

  POST /javadoc/generate → run javadoc over a source directory
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException

from docloom.core.errors import InvalidInputError, JavadocGenerationError

from ..deps import get_javadoc_service
from ..schemas import JavadocResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/javadoc", tags=["javadoc"])


@router.post("/generate", response_model=JavadocResponse)
def generate_javadoc(
    folder_path: str = Form(..., alias="folderPath"),
    classpath: Optional[str] = Form(None),
    javadoc_service=Depends(get_javadoc_service),
):
    """Generate Javadoc HTML for a folder of Java sources.

    An optional classpath (``os.pathsep``-separated) is combined with the
    Maven classpath when the folder holds a pom.xml.
    """
    try:
        result = javadoc_service.generate_docs(folder_path, classpath)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except JavadocGenerationError as e:
        raise HTTPException(status_code=500, detail={"message": str(e), "output": e.output})

    return JavadocResponse(
        success=result.success,
        message=result.message,
        output_dir=str(result.output_dir) if result.output_dir else None,
        file_count=result.file_count,
    )
