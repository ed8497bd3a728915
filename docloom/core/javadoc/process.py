"""Subprocess helper for the external JDK and Maven tools.

Tool failures are reported through ToolResult rather than raised; callers
decide whether a non-zero exit is fatal.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    command: List[str]
    exit_code: Optional[int]  # None when the tool never ran to completion
    output: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def run_tool(
    cmd: List[str],
    cwd: Optional[Union[str, os.PathLike]] = None,
    timeout: int = 300,
) -> ToolResult:
    """Run a CLI tool with stderr merged into stdout.

    Args:
        cmd: Command and arguments to execute
        cwd: Working directory for the tool
        timeout: Maximum execution time in seconds
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        logger.error("%s timed out after %ds", cmd[0], timeout)
        partial = e.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", errors="replace")
        return ToolResult(command=cmd, exit_code=None, output=partial, timed_out=True)
    except FileNotFoundError:
        logger.error("Tool not found: %s", cmd[0])
        return ToolResult(command=cmd, exit_code=None, output=f"Command not found: {cmd[0]}")
    except OSError as e:
        logger.error("Failed to start %s: %s", cmd[0], e)
        return ToolResult(command=cmd, exit_code=None, output=str(e))

    for line in proc.stdout.splitlines():
        logger.debug("%s output: %s", os.path.basename(cmd[0]), line)
    return ToolResult(command=cmd, exit_code=proc.returncode, output=proc.stdout)
