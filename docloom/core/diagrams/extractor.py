"""Relationship Extractor — second pass over a source tree.

Re-parses every file and, for each declared type, derives edges to the
other types of the tree:

  association   field of a declared type (labeled with the field name)
  dependency    method parameter or return type of a declared type
  inheritance   extends clause
  realization   implements clause

Edges are only emitted when the referenced type resolves to a name in the
KnownTypeRegistry; library and unresolved types produce nothing.
"""

import logging
import os
from typing import List, Optional, Sequence, Union

from ..ast_parser import ImportDeclaration, SourceUnit, TypeDeclaration, TypeReference
from .assembler import assemble_plantuml
from .models import (
    DiagramDocument,
    EdgeKind,
    ExtractionResult,
    FileParseWarning,
    KnownTypeRegistry,
    RelationshipEdge,
)
from .sources import JAVA_EXTENSION, iter_source_units, require_directory

logger = logging.getLogger(__name__)


def resolve_type(
    simple_name: str,
    package_name: str,
    imports: Sequence[ImportDeclaration],
    registry: KnownTypeRegistry,
) -> str:
    """Resolve a type name as written to a qualified name where possible.

    1. An import of ``simple_name`` from the current package wins.
    2. Otherwise ``<package>.<simple_name>`` if the tree declares it.
    3. Otherwise the bare simple name.
    """
    for imp in imports:
        if imp.is_asterisk:
            continue
        if imp.identifier == simple_name and imp.qualifier == package_name:
            return imp.name

    same_package = f"{package_name}.{simple_name}" if package_name else simple_name
    if same_package in registry:
        return same_package

    return simple_name


class _TypeResolver:
    """Resolves TypeReferences within one SourceUnit against the registry."""

    def __init__(self, unit: SourceUnit, registry: KnownTypeRegistry):
        self._package = unit.package
        self._imports = unit.imports
        self._registry = registry

    def known_target(self, ref: TypeReference) -> Optional[str]:
        """Qualified name of ref if it names a declared type, else None."""
        if not ref.simple_name:
            return None
        resolved = resolve_type(ref.simple_name, self._package, self._imports, self._registry)
        return resolved if resolved in self._registry else None


def declaration_edges(
    decl: TypeDeclaration, resolver: _TypeResolver
) -> List[RelationshipEdge]:
    """Edges originating at decl, in field → method → extends → implements order."""
    source = decl.qualified_name
    edges: List[RelationshipEdge] = []

    for member in decl.fields:
        target = resolver.known_target(member.type)
        if target:
            edges.append(RelationshipEdge(source, target, EdgeKind.ASSOCIATION, member.name))

    for method in decl.methods:
        for param in method.parameters:
            target = resolver.known_target(param.type)
            if target:
                edges.append(RelationshipEdge(source, target, EdgeKind.DEPENDENCY))
        target = resolver.known_target(method.return_type)
        if target:
            edges.append(RelationshipEdge(source, target, EdgeKind.DEPENDENCY))

    for ref in decl.extends:
        target = resolver.known_target(ref)
        if target:
            edges.append(RelationshipEdge(source, target, EdgeKind.INHERITANCE))

    for ref in decl.implements:
        target = resolver.known_target(ref)
        if target:
            edges.append(RelationshipEdge(source, target, EdgeKind.REALIZATION))

    return edges


def extract_relationships(
    root_dir: Union[str, os.PathLike],
    registry: KnownTypeRegistry,
    extension: str = JAVA_EXTENSION,
) -> ExtractionResult:
    """Collect declarations and relationship edges for every file under root_dir.

    Raises:
        InvalidInputError: root_dir is missing or not a directory
    """
    root = require_directory(root_dir)
    result = ExtractionResult()

    for item in iter_source_units(root, extension):
        if isinstance(item, FileParseWarning):
            result.warnings.append(item)
            continue
        resolver = _TypeResolver(item, registry)
        for decl in item.declarations:
            logger.debug("Processing %s: %s", decl.kind.value, decl.qualified_name)
            result.declarations.append(decl)
            result.edges.extend(declaration_edges(decl, resolver))

    logger.info(
        "Extracted %d declarations and %d relationships from %s",
        len(result.declarations),
        len(result.edges),
        root,
    )
    return result


def extract_diagram(
    root_dir: Union[str, os.PathLike],
    registry: KnownTypeRegistry,
    extension: str = JAVA_EXTENSION,
) -> DiagramDocument:
    """Run the extraction pass and assemble its PlantUML document."""
    result = extract_relationships(root_dir, registry, extension)
    return DiagramDocument(
        declarations=result.declarations,
        edges=result.edges,
        source=assemble_plantuml(result.declarations, result.edges),
        warnings=result.warnings,
    )
