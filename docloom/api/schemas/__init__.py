"""Pydantic schemas for API request/response models."""

from .javadoc import JavadocResponse
from .uml import UMLSourceResponse

__all__ = [
    'JavadocResponse',
    'UMLSourceResponse',
]
