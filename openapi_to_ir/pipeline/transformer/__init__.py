"""
Transformer - normalization passes run on a built Spec.
"""

from __future__ import annotations

from .comments import add_path_comments
from .context import RunContext
from .extraction import extract_all_of_fragments, extract_schemas, promote_anonymous_roots
from .naming import name_operations, name_paths, name_responses
from .normalize import order_resources, simplify_inline_schemas
from .tags import TagRenderer, apply_tags
from .transformer import DefaultTransformer

__all__ = [
    "DefaultTransformer",
    "RunContext",
    "TagRenderer",
    "extract_schemas",
    "extract_all_of_fragments",
    "promote_anonymous_roots",
    "name_paths",
    "name_operations",
    "name_responses",
    "apply_tags",
    "simplify_inline_schemas",
    "order_resources",
    "add_path_comments",
]
