"""
Pipeline - OpenAPI document to a normalized intermediate representation.

This module provides a multi-phase architecture for turning an API
document into a flat, named, cycle-safe model ready for code
generation:

1. Phase 1 (Parser): Decode the document into raw nodes
2. Phase 2 (Analyzer): Resolve schemas and build the IR
3. Phase 3 (Transformer): Extract standalone types, synthesize names,
   expand tags, simplify inline schemas and order resources
"""

from __future__ import annotations

from .config import IRGeneratorConfig, OperationNameStyle, ResolverConfig, TransformerConfig
from .errors import (
    DocumentDecodeError,
    IRError,
    MissingInputError,
    OverrideDecodeError,
    SequencingViolationError,
    TagTemplateError,
    UnrecognizedShapeError,
)
from .generator import PipelineGenerator
from .serializer import spec_to_dict

__all__ = [
    "PipelineGenerator",
    "IRGeneratorConfig",
    "ResolverConfig",
    "TransformerConfig",
    "OperationNameStyle",
    "spec_to_dict",
    "IRError",
    "MissingInputError",
    "UnrecognizedShapeError",
    "SequencingViolationError",
    "OverrideDecodeError",
    "TagTemplateError",
    "DocumentDecodeError",
]
