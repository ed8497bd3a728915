"""Diagram Assembler — deterministic PlantUML class diagram text.

Type blocks come first in discovery order, then one line per edge in
extraction order:

  association   A --> B : label
  dependency    A ..> B
  inheritance   A <|.. B
  realization   A <|.. B   (same arrow as inheritance)
"""

from typing import List, Sequence

from ..ast_parser import FieldMember, MethodMember, TypeDeclaration
from .models import EdgeKind, RelationshipEdge

START_MARKER = "@startuml"
END_MARKER = "@enduml"

_ARROWS = {
    EdgeKind.ASSOCIATION: "-->",
    EdgeKind.DEPENDENCY: "..>",
    EdgeKind.INHERITANCE: "<|..",
    EdgeKind.REALIZATION: "<|..",
}


def format_field(member: FieldMember) -> str:
    return f"{member.visibility.glyph} {member.name} : {member.type.text}"


def format_method(method: MethodMember) -> str:
    params = ", ".join(f"{p.name}: {p.type.text}" for p in method.parameters)
    return f"{method.visibility.glyph} {method.name}({params}) : {method.return_type.text}"


def format_edge(edge: RelationshipEdge) -> str:
    line = f"{edge.source} {_ARROWS[edge.kind]} {edge.target}"
    if edge.kind is EdgeKind.ASSOCIATION and edge.label:
        line += f" : {edge.label}"
    return line


def render_type_block(decl: TypeDeclaration) -> List[str]:
    lines = [f"{decl.kind.value} {decl.qualified_name} {{"]
    # A multi-variable declaration (``int a, b;``) is listed by its first variable
    for group in decl.field_groups:
        lines.append(f"  {format_field(group.members[0])}")
    for method in decl.methods:
        lines.append(f"  {format_method(method)}")
    lines.append("}")
    return lines


def assemble_plantuml(
    declarations: Sequence[TypeDeclaration], edges: Sequence[RelationshipEdge]
) -> str:
    lines = [START_MARKER]
    for decl in declarations:
        lines.extend(render_type_block(decl))
    lines.extend(format_edge(edge) for edge in edges)
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"
