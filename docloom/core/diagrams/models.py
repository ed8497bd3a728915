"""Diagram data models: registry, relationship edges and the assembled document."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional

from ..ast_parser.models import TypeDeclaration


class EdgeKind(str, Enum):
    ASSOCIATION = "association"
    DEPENDENCY = "dependency"
    INHERITANCE = "inheritance"
    REALIZATION = "realization"


@dataclass(frozen=True)
class KnownTypeRegistry:
    """Qualified names of every type declared in a scanned tree.

    Immutable once built; passed by value to the relationship extractor.
    """

    names: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, names: Iterable[str]) -> "KnownTypeRegistry":
        return cls(frozenset(names))

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names))

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class RelationshipEdge:
    source: str
    target: str
    kind: EdgeKind
    label: Optional[str] = None


@dataclass(frozen=True)
class FileParseWarning:
    """A source file that was skipped; not raised, collected."""

    file_path: str
    message: str

    def __str__(self) -> str:
        return f"{self.file_path}: {self.message}"


@dataclass
class ExtractionResult:
    declarations: List[TypeDeclaration] = field(default_factory=list)
    edges: List[RelationshipEdge] = field(default_factory=list)
    warnings: List[FileParseWarning] = field(default_factory=list)


@dataclass
class DiagramDocument:
    """Declarations and edges of a tree plus their PlantUML rendering."""

    declarations: List[TypeDeclaration]
    edges: List[RelationshipEdge]
    source: str
    warnings: List[FileParseWarning] = field(default_factory=list)

    def __str__(self) -> str:
        return self.source
