"""UML diagram response schemas."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UMLSourceResponse(BaseModel):
    """PlantUML source for a directory."""
    model_config = ConfigDict(populate_by_name=True)

    plant_uml: str = Field(..., alias="plantUML", description="PlantUML class diagram source")
    type_count: int = Field(0, description="Number of classes and interfaces in the diagram")
    relationship_count: int = Field(0, description="Number of relationship edges")
    warnings: List[str] = Field(default_factory=list, description="Files skipped because they could not be parsed")
