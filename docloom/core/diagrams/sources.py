"""Source tree access shared by the scan and extraction passes."""

import logging
import os
from pathlib import Path
from typing import Iterator, Union

from ..ast_parser import SourceUnit, get_parser, iter_source_files
from ..errors import InvalidInputError
from .models import FileParseWarning

logger = logging.getLogger(__name__)

JAVA_EXTENSION = ".java"


def require_directory(root_dir: Union[str, os.PathLike]) -> Path:
    """Return root_dir as a Path, or raise InvalidInputError."""
    path = Path(root_dir)
    if not path.exists():
        raise InvalidInputError(f"Directory does not exist: {root_dir}")
    if not path.is_dir():
        raise InvalidInputError(f"Not a directory: {root_dir}")
    return path


def iter_source_units(root: Path, extension: str = JAVA_EXTENSION) -> Iterator[Union[SourceUnit, FileParseWarning]]:
    """Parse every source file under root, in walk order.

    Files that cannot be read or parsed are yielded as FileParseWarning
    instead of a SourceUnit; the walk always continues.
    """
    parser = get_parser("java")
    for path in iter_source_files(root, extension):
        try:
            unit = parser.parse_file(path)
        except Exception as e:
            logger.error("Error processing %s: %s", path, e)
            yield FileParseWarning(file_path=str(path), message=f"{type(e).__name__}: {e}")
            continue
        if unit.errors:
            message = "; ".join(e.message for e in unit.errors)
            logger.warning("Skipping %s: %s", path, message)
            yield FileParseWarning(file_path=str(path), message=message)
            continue
        yield unit
