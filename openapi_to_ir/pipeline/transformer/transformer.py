"""
Default transformer: runs the normalization passes in order.

Phase 3 of the pipeline. Every pass mutates the Spec in place and
relies on the passes before it (operation naming needs path names,
response naming needs operation names, ...), so the order is fixed.
"""

from __future__ import annotations

import logging

from ..analyzer.ir_nodes import Spec
from ..config import TransformerConfig
from .comments import add_path_comments
from .context import RunContext
from .extraction import extract_all_of_fragments, extract_schemas, promote_anonymous_roots
from .naming import name_operations, name_paths, name_responses
from .normalize import order_resources, simplify_inline_schemas
from .tags import apply_tags

logger = logging.getLogger(__name__)


class DefaultTransformer:
    """Turns a freshly built Spec into its final, normalized form."""

    def __init__(self, config: TransformerConfig | None = None):
        """
        Initialize the transformer.

        Args:
            config: Transformer configuration, defaults if None
        """
        self.config = config or TransformerConfig()

    def passes(self, context: RunContext):
        """Return the ordered (name, callable) passes of one run."""
        config = self.config
        return [
            ("extract_schemas", lambda spec: extract_schemas(spec)),
            ("extract_all_of_fragments", lambda spec: extract_all_of_fragments(spec, context)),
            ("name_paths", lambda spec: name_paths(spec)),
            ("name_operations", lambda spec: name_operations(spec, config.operation_name_style)),
            ("name_responses", lambda spec: name_responses(spec)),
            ("promote_anonymous_roots", lambda spec: promote_anonymous_roots(spec, context)),
            ("apply_tags", lambda spec: apply_tags(spec, config.tags, context)),
            ("simplify_inline_schemas", lambda spec: simplify_inline_schemas(spec)),
            ("order_resources", lambda spec: order_resources(spec)),
            ("add_path_comments", lambda spec: add_path_comments(spec, config)),
        ]

    def transform(self, spec: Spec, context: RunContext | None = None) -> Spec:
        """
        Run every pass on spec.

        Args:
            spec: The Spec to transform in place
            context: Run state, a fresh one if None

        Returns:
            The same Spec, transformed
        """
        context = context or RunContext()

        for name, run_pass in self.passes(context):
            logger.debug("Running pass %s", name)
            run_pass(spec)

        logger.info(
            "Transformed spec: %d schemas, %d paths, %d operations",
            len(spec.schemas),
            len(spec.paths),
            sum(1 for _ in spec.iter_operations()),
        )
        return spec
