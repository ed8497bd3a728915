"""DiagramService — orchestrator for class diagram generation.

Each request re-derives everything from the filesystem: scan the tree into a
KnownTypeRegistry, extract declarations and relationships against it, and
assemble PlantUML. Nothing is cached between requests.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config import DocloomSettings
from ..errors import InvalidInputError
from .extractor import extract_diagram
from .models import DiagramDocument
from .renderer import MEDIA_TYPES, render_diagram
from .scanner import scan_declarations

logger = logging.getLogger(__name__)


class DiagramService:
    """Generates PlantUML class diagrams for directories of Java sources."""

    def __init__(self, settings: DocloomSettings):
        self._settings = settings

    @property
    def allowed_base_directory(self) -> Optional[Path]:
        base = self._settings.uml.allowed_base_directory
        return Path(base).resolve() if base else None

    def validate_directory(self, directory: str) -> Path:
        """Resolve directory and check it is an existing directory inside the allowed base.

        Raises:
            InvalidInputError: empty path, outside the base, missing or not a directory
        """
        if not directory or not directory.strip():
            raise InvalidInputError("Directory path is required")

        path = Path(directory).resolve()
        base = self.allowed_base_directory
        if base is not None and not path.is_relative_to(base):
            logger.warning("Invalid directory path: %s not within %s", path, base)
            raise InvalidInputError(f"Invalid directory path: must be within {base}")

        if not path.is_dir():
            logger.warning("Directory does not exist or is not a directory: %s", path)
            raise InvalidInputError(f"Invalid directory path: {directory}")
        return path

    def generate_source(self, directory: str) -> DiagramDocument:
        """Build the class diagram document for a directory."""
        path = self.validate_directory(directory)
        extension = self._settings.uml.source_extension

        registry = scan_declarations(path, extension)
        document = extract_diagram(path, registry, extension)

        if document.warnings:
            logger.warning("Skipped %d unparseable files under %s", len(document.warnings), path)
        logger.debug("Generated PlantUML:\n%s", document.source)
        return document

    def render(self, directory: str, fmt: str = "svg") -> bytes:
        """Build the diagram for a directory and render it to an image."""
        document = self.generate_source(directory)
        return render_diagram(document.source, fmt, self._settings.renderer)

    @staticmethod
    def media_type(fmt: str) -> str:
        return MEDIA_TYPES.get(fmt, "application/octet-stream")
