"""
Spec builder: raw document to IR.

Phase 2 of the pipeline: component schemas become registry roots,
paths/operations/parameters/responses become IR records with their
schemas resolved. No naming beyond explicit names happens here.
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import to_pascal_case
from ..config import ResolverConfig
from ..errors import DocumentDecodeError
from ..schema_ast.nodes import (
    RawDocument,
    RawOperation,
    RawParameter,
    RawPath,
    RawRequestBody,
    RawResponse,
    RawSchemaRef,
)
from .ir_nodes import (
    Operation,
    Parameter,
    ParameterLocation,
    ParameterSerialization,
    Path,
    Response,
    Schema,
    SerializationStyle,
    Spec,
)
from .resolver import SchemaResolver

logger = logging.getLogger(__name__)


class SpecBuilder:
    """Builds a Spec from a raw document."""

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()
        self.resolver = SchemaResolver(self.config)

    def build(self, raw_doc: RawDocument) -> Spec:
        """
        Build the IR of a document.

        Args:
            raw_doc: The decoded document

        Returns:
            Spec with the component registry and all paths
        """
        spec = Spec()

        for name, raw_ref in raw_doc.schemas.items():
            schema = self._build_component(name, raw_ref)
            if schema.create:
                spec.schemas.append(schema)
            else:
                logger.debug("Component %s is not created, skipping it", name)

        for raw_path in raw_doc.paths:
            spec.paths.append(self._build_path(raw_path))

        return spec

    def _build_component(self, name: str, raw_ref: RawSchemaRef) -> Schema:
        """Resolve a component schema.

        A component is created unless it is renamed or aliased to another
        type, or its override explicitly says not to.
        """
        schema = self.resolver.resolve(raw_ref)
        schema.original_name = name

        if schema.variant is None or schema.name != name:
            return schema

        override = None
        if raw_ref.value is not None:
            override = self.resolver.read_override(raw_ref.value.metadata, name)
        if override is None or override.create is not False:
            schema.create = True
        return schema

    def _read_name(self, metadata: dict[str, Any]) -> str:
        """Read an explicit name from the extension metadata of a path or response."""
        ext = metadata.get(self.config.extension_name)
        if not isinstance(ext, dict):
            return ""
        name = ext.get("name")
        if not isinstance(name, str):
            if name is not None:
                logger.warning("Ignoring non-string name %r in %s", name, self.config.extension_name)
            return ""
        return name.strip()

    def _build_path(self, raw_path: RawPath) -> Path:
        path = Path(
            path_string=raw_path.path_string,
            name=self._read_name(raw_path.metadata),
            description=raw_path.description,
        )
        for raw_op in raw_path.operations:
            path.operations.append(self._build_operation(raw_op, raw_path.parameters))
        return path

    def _build_operation(self, raw_op: RawOperation, path_params: list[RawParameter]) -> Operation:
        op = Operation(
            method=raw_op.method,
            name=to_pascal_case(raw_op.operation_id),
            operation_id=raw_op.operation_id,
            description=raw_op.description,
        )

        declared = {(p.name, p.location) for p in raw_op.parameters}
        for raw_param in raw_op.parameters:
            op.parameters.extend(self._build_parameters(raw_param))
        # Path-level parameters are resolved again for every operation
        for raw_param in path_params:
            if (raw_param.name, raw_param.location) not in declared:
                op.parameters.extend(self._build_parameters(raw_param))

        if raw_op.request_body is not None:
            op.parameters.extend(self._build_body_parameters(raw_op.request_body))

        for raw_res in raw_op.responses:
            op.responses.extend(self._build_responses(raw_res))

        for event, cb_paths in raw_op.callbacks.items():
            op.callbacks[to_pascal_case(event)] = [self._build_path(cb_path) for cb_path in cb_paths]

        return op

    def _resolve_optional(self, raw_ref: RawSchemaRef | None) -> Schema | None:
        if raw_ref is None:
            return None
        return self.resolver.resolve(raw_ref)

    def _build_parameters(self, raw_param: RawParameter) -> list[Parameter]:
        """Build a parameter, or one per content type if it declares content."""
        try:
            location = ParameterLocation(raw_param.location)
            style = SerializationStyle(raw_param.style)
        except ValueError as e:
            raise DocumentDecodeError(str(e), node_name=raw_param.name) from e

        def make(content_type: str, schema_ref: RawSchemaRef | None) -> Parameter:
            return Parameter(
                name=raw_param.name,
                description=raw_param.description,
                location=location,
                content_type=content_type,
                schema=self._resolve_optional(schema_ref),
                serialization=ParameterSerialization(style=style, explode=raw_param.explode),
                required=raw_param.required,
            )

        if raw_param.schema is not None:
            return [make("", raw_param.schema)]
        # Without content either, there is nothing to generate
        return [make(media.content_type, media.schema) for media in raw_param.content]

    def _build_body_parameters(self, body: RawRequestBody) -> list[Parameter]:
        """Build one body parameter per content type."""
        return [
            Parameter(
                name="body",
                description=body.description,
                location=ParameterLocation.BODY,
                content_type=media.content_type,
                schema=self._resolve_optional(media.schema),
                required=body.required,
            )
            for media in body.content
        ]

    def _build_responses(self, raw_res: RawResponse) -> list[Response]:
        """Build a response, or one per content type."""
        name = self._read_name(raw_res.metadata)
        if not raw_res.content:
            return [Response(name=name, description=raw_res.description, code=raw_res.code)]
        return [
            Response(
                name=name,
                description=raw_res.description,
                code=raw_res.code,
                content_type=media.content_type,
                schema=self._resolve_optional(media.schema),
            )
            for media in raw_res.content
        ]
