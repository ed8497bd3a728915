"""AST Parser utilities.

Language detection, parser registry, and source tree walking.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Union

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".java": "java",
}

# Version-control metadata; every other directory is walked
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".svn",
    ".hg",
})

# Parser registry (lazy-loaded)
_parser_registry: Dict[str, "BaseLanguageParser"] = {}


def detect_language(file_path: Union[str, os.PathLike]) -> Optional[str]:
    """Detect programming language from file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(os.fspath(file_path))
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(language: str) -> "BaseLanguageParser":
    """Get a parser instance for the given language.

    Raises:
        ValueError: If language is not supported
    """
    if language not in _parser_registry:
        if language == "java":
            from .java_parser import JavaParser
            _parser_registry["java"] = JavaParser()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {list(SUPPORTED_EXTENSIONS.values())}"
            )

    return _parser_registry[language]


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking."""
    return dir_name in SKIP_DIRECTORIES


def iter_source_files(root_dir: Union[str, os.PathLike], extension: str = ".java") -> Iterator[Path]:
    """Yield regular files under root_dir ending in ``extension``.

    Order is deterministic: each directory's files in lexicographic order,
    then its subdirectories in lexicographic order.
    """
    for dirpath, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d))
        for fname in sorted(filenames):
            if not fname.endswith(extension):
                continue
            full_path = Path(dirpath) / fname
            if full_path.is_file():
                yield full_path


def list_source_files(root_dir: Union[str, os.PathLike], extension: str = ".java") -> List[Path]:
    return list(iter_source_files(root_dir, extension))
