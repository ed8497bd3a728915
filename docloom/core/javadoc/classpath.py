"""Classpath resolution for javadoc runs.

The effective classpath is the caller's custom entries followed by the
project's compile-scope Maven dependencies (when a pom.xml is present),
de-duplicated in order.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from .process import run_tool

logger = logging.getLogger(__name__)

CLASSPATH_OUTPUT_FILE = "javadoc_classpath.txt"


def split_classpath(classpath: Optional[str]) -> List[str]:
    if not classpath or not classpath.strip():
        return []
    return [entry for entry in classpath.strip().split(os.pathsep) if entry]


def find_maven_command(project_root: Path, default_command: str) -> str:
    """Prefer the project's Maven wrapper when it exists and is executable."""
    for wrapper in ("mvnw.cmd", "mvnw"):
        path = project_root / wrapper
        if path.is_file() and os.access(path, os.X_OK):
            logger.info("Using Maven Wrapper found at: %s", path)
            return str(path.resolve())
    logger.info(
        "Maven Wrapper not found or not executable in %s. Using configured maven command: %s",
        project_root,
        default_command,
    )
    return default_command


def get_maven_classpath(project_root: Path, maven_command: str = "mvn", timeout: int = 300) -> Optional[str]:
    """Run ``dependency:build-classpath`` and return its result, or None on failure."""
    command = find_maven_command(project_root, maven_command)
    output_file = project_root / CLASSPATH_OUTPUT_FILE

    cmd = [
        command,
        "dependency:build-classpath",
        f"-Dmdep.outputFile={output_file}",
        "-DincludeScope=compile",
    ]
    logger.info("Executing Maven command for classpath: %s", " ".join(cmd))

    result = run_tool(cmd, cwd=project_root, timeout=timeout)
    try:
        if not result.ok:
            logger.error(
                "Maven dependency:build-classpath failed with exit code %s. Output:\n%s",
                result.exit_code,
                result.output,
            )
            return None

        if not output_file.is_file():
            logger.error("Maven command successful, but classpath output file %s was not created.", output_file)
            return None

        return output_file.read_text(encoding="utf-8").strip()
    finally:
        output_file.unlink(missing_ok=True)


def determine_effective_classpath(
    project_root: Path,
    custom_classpath: Optional[str] = None,
    maven_command: str = "mvn",
    maven_timeout: int = 300,
) -> str:
    elements = split_classpath(custom_classpath)

    if (project_root / "pom.xml").is_file():
        logger.info("pom.xml found in %s. Attempting to determine Maven classpath.", project_root)
        maven_cp = get_maven_classpath(project_root, maven_command, maven_timeout)
        if maven_cp:
            elements.extend(split_classpath(maven_cp))
            logger.info("Successfully determined Maven classpath.")
        else:
            logger.warning("Failed to determine Maven classpath for %s", project_root)
    else:
        logger.info("No pom.xml found in %s. Skipping Maven classpath resolution.", project_root)

    return os.pathsep.join(dict.fromkeys(elements))


def find_lombok_jar(classpath: Optional[str]) -> Optional[str]:
    """First Lombok jar on the classpath, for annotation processing."""
    for entry in split_classpath(classpath):
        if "lombok" in os.path.basename(entry) and entry.endswith(".jar"):
            return entry
    return None
