"""AST Parser data models.

Defines the structural representation of a parsed source file.
These are pure data containers — no parsing logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Visibility(str, Enum):
    """Member visibility as declared by an explicit modifier."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"

    @property
    def glyph(self) -> str:
        return _VISIBILITY_GLYPHS[self]


_VISIBILITY_GLYPHS = {
    Visibility.PUBLIC: "+",
    Visibility.PRIVATE: "-",
    Visibility.PROTECTED: "#",
    Visibility.PACKAGE: "~",
}


class TypeKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"


@dataclass(frozen=True)
class TypeReference:
    """A type as written in source.

    ``text`` is the verbatim declaration (``List<Customer>``); ``simple_name``
    is the class/interface identifier used for resolution (``List``), or None
    for primitive, void and array types.
    """

    text: str
    simple_name: Optional[str] = None


@dataclass(frozen=True)
class ImportDeclaration:
    """A single ``import`` statement."""

    name: str  # "com.shop.Customer" (no trailing ".*")
    is_static: bool = False
    is_asterisk: bool = False

    @property
    def identifier(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def qualifier(self) -> Optional[str]:
        parts = self.name.rsplit(".", 1)
        return parts[0] if len(parts) > 1 else None


@dataclass
class FieldMember:
    visibility: Visibility
    type: TypeReference
    name: str


@dataclass
class Parameter:
    name: str
    type: TypeReference


@dataclass
class MethodMember:
    visibility: Visibility
    return_type: TypeReference
    name: str
    parameters: List[Parameter] = field(default_factory=list)


@dataclass
class FieldGroup:
    """One field declaration statement; ``int a, b;`` holds two members."""

    members: List[FieldMember] = field(default_factory=list)


@dataclass
class TypeDeclaration:
    """A class or interface declared in a SourceUnit.

    Other declarations are referenced by qualified name only.
    """

    name: str
    qualified_name: str
    kind: TypeKind
    field_groups: List[FieldGroup] = field(default_factory=list)
    methods: List[MethodMember] = field(default_factory=list)
    extends: List[TypeReference] = field(default_factory=list)
    implements: List[TypeReference] = field(default_factory=list)

    @property
    def fields(self) -> List[FieldMember]:
        return [m for group in self.field_groups for m in group.members]


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class SourceUnit:
    """Complete parse output for a single file."""

    file_path: str
    language: str
    package: str = ""
    imports: List[ImportDeclaration] = field(default_factory=list)
    declarations: List[TypeDeclaration] = field(default_factory=list)
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when nothing prevented a complete structural parse."""
        return not self.errors
