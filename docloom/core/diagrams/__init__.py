"""UML class diagram generation from Java source trees.

Two passes over the tree, both pure functions of the filesystem:
  scan_declarations  → KnownTypeRegistry
  extract_diagram    → DiagramDocument (declarations, edges, PlantUML text)

Public API:
  DiagramService — request-level orchestrator (validation, rendering)
"""

from .assembler import assemble_plantuml
from .extractor import extract_diagram, extract_relationships, resolve_type
from .models import (
    DiagramDocument,
    EdgeKind,
    ExtractionResult,
    FileParseWarning,
    KnownTypeRegistry,
    RelationshipEdge,
)
from .renderer import plantuml_encode, render_diagram
from .scanner import scan_declarations
from .service import DiagramService

__all__ = [
    "DiagramService",
    "DiagramDocument",
    "EdgeKind",
    "ExtractionResult",
    "FileParseWarning",
    "KnownTypeRegistry",
    "RelationshipEdge",
    "assemble_plantuml",
    "extract_diagram",
    "extract_relationships",
    "plantuml_encode",
    "render_diagram",
    "resolve_type",
    "scan_declarations",
]
