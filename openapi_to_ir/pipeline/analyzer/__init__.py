"""
Analyzer - resolves raw schemas and builds the IR.
"""

from __future__ import annotations

from .builder import SpecBuilder
from .ir_nodes import (
    Operation,
    Parameter,
    ParameterLocation,
    ParameterSerialization,
    Path,
    PrimitiveType,
    Response,
    Schema,
    SchemaPath,
    SerializationStyle,
    Spec,
    Variant,
    WalkControl,
    walk_schema,
)
from .resolver import SchemaOverride, SchemaResolver

__all__ = [
    "SpecBuilder",
    "SchemaResolver",
    "SchemaOverride",
    "Schema",
    "SchemaPath",
    "Variant",
    "PrimitiveType",
    "WalkControl",
    "walk_schema",
    "Spec",
    "Path",
    "Operation",
    "Parameter",
    "ParameterLocation",
    "ParameterSerialization",
    "SerializationStyle",
    "Response",
]
