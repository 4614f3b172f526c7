"""OpenAPI to IR

A Python package for turning OpenAPI 3 documents into a normalized
intermediate representation: every standalone type extracted into a
flat registry, reference cycles broken, and deterministic names for
paths, operations and responses.
"""

__version__ = "1.0.1"
__author__ = "François Lagunas"

from .pipeline import (
    DocumentDecodeError,
    IRError,
    IRGeneratorConfig,
    OperationNameStyle,
    PipelineGenerator,
    ResolverConfig,
    TransformerConfig,
    spec_to_dict,
)

__all__ = [
    "PipelineGenerator",
    "IRGeneratorConfig",
    "ResolverConfig",
    "TransformerConfig",
    "OperationNameStyle",
    "spec_to_dict",
    "IRError",
    "DocumentDecodeError",
]
