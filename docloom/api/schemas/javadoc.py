"""Javadoc response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class JavadocResponse(BaseModel):
    """Javadoc generation result."""
    success: bool = Field(..., description="Whether javadoc ran successfully")
    message: str = Field(..., description="Human-readable outcome")
    output_dir: Optional[str] = Field(None, description="Directory holding the generated HTML")
    file_count: int = Field(0, description="Number of .java files documented")
