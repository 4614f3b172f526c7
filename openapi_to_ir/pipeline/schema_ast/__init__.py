"""
Schema AST - raw nodes decoded from an OpenAPI document.
"""

from __future__ import annotations

from .nodes import RawDocument, RawSchema, RawSchemaRef
from .parser import OpenAPIParser

__all__ = ["OpenAPIParser", "RawDocument", "RawSchema", "RawSchemaRef"]
