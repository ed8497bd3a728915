"""Exception hierarchy shared by the diagram and javadoc services."""

from typing import Optional


class DocloomError(Exception):
    """Base class for all docloom errors."""


class InvalidInputError(DocloomError, ValueError):
    """A request argument (usually a directory path) is unusable."""


class RenderingError(DocloomError, RuntimeError):
    """The PlantUML renderer could not produce an image."""


class JavadocGenerationError(DocloomError, RuntimeError):
    """The javadoc tool failed; ``output`` holds what it printed."""

    def __init__(self, message: str, output: str = "", exit_code: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.exit_code = exit_code


class ConfigError(DocloomError):
    """The configuration file is unreadable or invalid."""
