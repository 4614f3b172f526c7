"""
Pipeline generator: OpenAPI document to IR.

Runs the phases in order:

1. Parser: decode the document into raw nodes
2. Builder: resolve schemas and build the Spec
3. Transformer: extract, name, tag, simplify and order
"""

from __future__ import annotations

import logging
from typing import Any

from .analyzer.builder import SpecBuilder
from .analyzer.ir_nodes import Spec
from .config import IRGeneratorConfig
from .schema_ast.parser import OpenAPIParser
from .transformer import DefaultTransformer, RunContext

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates the IR of an OpenAPI document."""

    def __init__(self, document: dict[str, Any], config: IRGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            document: The decoded OpenAPI document
            config: Generation configuration, defaults if None
        """
        self.document = document
        self.config = config or IRGeneratorConfig()

    def generate(self) -> Spec:
        """
        Run the whole pipeline.

        Returns:
            The finished Spec
        """
        raw_doc = OpenAPIParser().parse(self.document)
        logger.debug("Decoded %d component schemas and %d paths", len(raw_doc.schemas), len(raw_doc.paths))

        spec = SpecBuilder(self.config.resolver).build(raw_doc)

        return DefaultTransformer(self.config.transformer).transform(spec, RunContext())
