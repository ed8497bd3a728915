"""JavadocService — runs the JDK javadoc tool over a source tree.

Each run writes into a fresh ``docs-<id>`` directory under the configured
output base so concurrent requests never share an output location.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..ast_parser import list_source_files
from ..config import JavadocSettings
from ..errors import InvalidInputError, JavadocGenerationError
from .classpath import determine_effective_classpath, find_lombok_jar
from .process import run_tool

logger = logging.getLogger(__name__)

LOMBOK_PROCESSOR = "lombok.launch.AnnotationProcessorHider$AnnotationProcessor"


@dataclass
class JavadocResult:
    success: bool
    message: str
    output_dir: Optional[Path] = None
    tool_output: str = ""
    file_count: int = 0


class JavadocService:
    """Generates HTML API documentation for a directory of Java sources."""

    def __init__(self, settings: JavadocSettings):
        self._settings = settings

    def build_command(
        self,
        source_path: Path,
        output_dir: Path,
        java_files: List[Path],
        classpath: str,
    ) -> List[str]:
        cmd = [
            self._settings.command,
            "-d", str(output_dir),
            "-sourcepath", str(source_path),
        ]

        if classpath:
            logger.info("Using effective classpath: %s", classpath)
            cmd += ["-classpath", classpath]
            lombok = find_lombok_jar(classpath)
            if lombok:
                logger.info("Processor path: %s", lombok)
                cmd += ["-processorpath", lombok, "-processor", LOMBOK_PROCESSOR]
        else:
            logger.warning(
                "No classpath provided or determined. Javadoc might miss dependencies (e.g., Spring annotations)."
            )

        cmd += [
            "-encoding", "UTF-8",
            "-docencoding", "UTF-8",
            "-charset", "UTF-8",
        ]
        if self._settings.disable_doclint:
            cmd.append("-Xdoclint:none")

        cmd.extend(str(f) for f in java_files)
        return cmd

    def generate_docs(self, source_directory: str, custom_classpath: Optional[str] = None) -> JavadocResult:
        """Run javadoc for every .java file under source_directory.

        Raises:
            InvalidInputError: source_directory is missing or not a directory
            JavadocGenerationError: javadoc exited non-zero, timed out or is not installed
        """
        if not source_directory or not Path(source_directory).is_dir():
            raise InvalidInputError(
                f"Source directory does not exist or is not a directory: {source_directory}"
            )
        source_path = Path(source_directory).resolve()

        java_files = list_source_files(source_path)
        if not java_files:
            logger.warning("No .java files found in directory: %s", source_path)
            return JavadocResult(
                success=True,
                message=f"No .java files found in {source_directory}. No Javadoc generated.",
            )

        output_dir = (Path(self._settings.output_base_dir) / f"docs-{uuid.uuid4().hex[:8]}").resolve()
        output_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Source directory: %s", source_path)
        logger.info("Output directory for Javadoc: %s", output_dir)
        logger.info("Found %d .java files to document.", len(java_files))

        classpath = determine_effective_classpath(
            source_path,
            custom_classpath,
            self._settings.maven_command,
            self._settings.maven_timeout_seconds,
        )
        cmd = self.build_command(source_path, output_dir, java_files, classpath)
        logger.info("Executing Javadoc command: %s", " ".join(cmd))

        result = run_tool(cmd, cwd=source_path, timeout=self._settings.timeout_seconds)

        if not result.ok:
            if result.timed_out:
                reason = f"timed out after {self._settings.timeout_seconds}s"
            elif result.exit_code is None:
                reason = "could not be started"
            else:
                reason = f"failed with exit code {result.exit_code}"
            logger.error("Javadoc generation %s. Output:\n%s", reason, result.output)
            raise JavadocGenerationError(
                f"Javadoc generation {reason}. Check logs for details.",
                output=result.output,
                exit_code=result.exit_code,
            )

        if (output_dir / "index.html").is_file():
            logger.info("Javadoc generation successful. Output at: %s", output_dir)
            message = f"Javadoc generated successfully at: {output_dir}"
        else:
            logger.warning(
                "Javadoc process exited successfully, but index.html was not found in the output. "
                "Javadoc output:\n%s",
                result.output,
            )
            message = (
                "Javadoc process completed, but main index file might be missing. "
                f"Check logs and output at: {output_dir}"
            )

        return JavadocResult(
            success=True,
            message=message,
            output_dir=output_dir,
            tool_output=result.output,
            file_count=len(java_files),
        )
