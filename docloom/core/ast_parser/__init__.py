"""docloom AST Parser — tree-sitter based Java parsing.

Public API:
    parse_file(path, project_root) → SourceUnit
    parse_source(source, file_path, language) → SourceUnit
    detect_language(file_path) → str | None
    iter_source_files(root_dir, extension) → Iterator[Path]
"""

from .models import (
    FieldGroup,
    FieldMember,
    ImportDeclaration,
    MethodMember,
    Parameter,
    ParseError,
    SourceUnit,
    TypeDeclaration,
    TypeKind,
    TypeReference,
    Visibility,
)
from .utils import (
    detect_language,
    get_parser,
    iter_source_files,
    list_source_files,
    should_skip_directory,
)

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "get_parser",
    "iter_source_files",
    "list_source_files",
    "should_skip_directory",
    "FieldGroup",
    "FieldMember",
    "ImportDeclaration",
    "MethodMember",
    "Parameter",
    "ParseError",
    "SourceUnit",
    "TypeDeclaration",
    "TypeKind",
    "TypeReference",
    "Visibility",
]


def parse_file(file_path, project_root: str = "") -> SourceUnit:
    """Parse a source file into a SourceUnit.

    Raises:
        ValueError: If the file's language is not supported
    """
    language = detect_language(file_path)
    if not language:
        raise ValueError(f"Unsupported source file: {file_path}")
    return get_parser(language).parse_file(file_path, project_root)


def parse_source(source_text: str, file_path: str, language: str | None = None) -> SourceUnit:
    """Parse source code string into a SourceUnit.

    Args:
        source_text: Source code as string
        file_path: Relative file path (for metadata)
        language: Language identifier. If None, detected from file_path.
    """
    if language is None:
        language = detect_language(file_path)
    if not language:
        raise ValueError(f"Unsupported source file: {file_path}")
    return get_parser(language).parse_source(source_text, file_path)
