"""Declaration Scanner — first pass over a source tree.

Collects the qualified name of every class and interface declared under a
directory into a KnownTypeRegistry.
"""

import logging
import os
from typing import Union

from .models import FileParseWarning, KnownTypeRegistry
from .sources import JAVA_EXTENSION, iter_source_units, require_directory

logger = logging.getLogger(__name__)


def scan_declarations(
    root_dir: Union[str, os.PathLike], extension: str = JAVA_EXTENSION
) -> KnownTypeRegistry:
    """Build the registry of types declared anywhere under root_dir.

    Duplicate qualified names collapse into one entry. Unparseable files are
    skipped with a warning.

    Raises:
        InvalidInputError: root_dir is missing or not a directory
    """
    root = require_directory(root_dir)

    names = set()
    skipped = 0
    for item in iter_source_units(root, extension):
        if isinstance(item, FileParseWarning):
            skipped += 1
            continue
        for decl in item.declarations:
            names.add(decl.qualified_name)
            logger.debug("Found %s: %s", decl.kind.value, decl.qualified_name)

    logger.info("Scanned %s: %d declared types (%d files skipped)", root, len(names), skipped)
    return KnownTypeRegistry.of(names)
