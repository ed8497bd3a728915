"""Javadoc generation through the JDK tool, with Maven classpath resolution.

Public API:
  JavadocService — validates input, resolves the classpath, runs javadoc
"""

from .service import JavadocResult, JavadocService

__all__ = ["JavadocResult", "JavadocService"]
