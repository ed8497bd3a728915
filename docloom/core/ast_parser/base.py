"""Base interface for language-specific AST parsers.

Defines the Strategy pattern base class that language parsers implement.
Shared parsing logic lives here; language-specific extraction is delegated.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Union

import tree_sitter

from .models import ImportDeclaration, ParseError, SourceUnit, TypeDeclaration

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extract_package(): namespace the file declares
    - extract_imports(): import declarations
    - extract_declarations(): walks AST tree and extracts TypeDeclaration objects
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'java')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def extract_package(self, tree: tree_sitter.Tree, source: bytes) -> str:
        """Return the declared namespace, or "" when the file has none."""
        ...

    @abstractmethod
    def extract_imports(self, tree: tree_sitter.Tree, source: bytes) -> List[ImportDeclaration]:
        """Extract import declarations from the AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes

        Returns:
            Imports in source order
        """
        ...

    @abstractmethod
    def extract_declarations(
        self, tree: tree_sitter.Tree, source: bytes, package_name: str
    ) -> List[TypeDeclaration]:
        """Extract type declarations from a parsed tree-sitter AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes
            package_name: Namespace used to qualify declaration names

        Returns:
            Declarations in discovery (pre-order) order
        """
        ...

    def parse_file(self, file_path: Union[str, os.PathLike], project_root: str = "") -> SourceUnit:
        """Parse a source file into a SourceUnit.

        Args:
            file_path: Path to the source file
            project_root: Project root for computing relative paths

        Returns:
            SourceUnit; read failures are reported in ``errors``
        """
        file_path = os.fspath(file_path)
        if project_root and file_path.startswith(project_root):
            rel_path = file_path[len(project_root):].lstrip("/")
        else:
            rel_path = file_path

        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            return SourceUnit(
                file_path=rel_path,
                language=self.get_language(),
                errors=[ParseError(file_path=rel_path, line=0, message=str(e), severity="error")],
            )

        return self.parse_source(source_text, rel_path)

    def parse_source(self, source_text: str, file_path: str) -> SourceUnit:
        """Parse source code string into a SourceUnit.

        A tree containing syntax errors is reported as an error and yields
        no declarations: partially parsed files are not analysed.
        """
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            return SourceUnit(
                file_path=file_path,
                language=self.get_language(),
                line_count=line_count,
                errors=[
                    ParseError(
                        file_path=file_path,
                        line=line,
                        message=f"Syntax error near line {line}",
                        severity="error",
                    )
                ],
            )

        package_name = self.extract_package(tree, source_bytes)
        imports = self.extract_imports(tree, source_bytes)
        declarations = self.extract_declarations(tree, source_bytes, package_name)

        return SourceUnit(
            file_path=file_path,
            language=self.get_language(),
            package=package_name,
            imports=imports,
            declarations=declarations,
            line_count=line_count,
        )


def _first_error_line(node: tree_sitter.Node) -> int:
    """1-based line of the first ERROR or MISSING node, depth-first."""
    while node.type != "ERROR" and not node.is_missing:
        child = next((c for c in node.children if c.has_error or c.is_missing), None)
        if child is None:
            break
        node = child
    return node.start_point.row + 1
