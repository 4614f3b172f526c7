"""
OpenAPI 3 document parser that builds the raw node graph.

Phase 1 of the pipeline: decode the document into raw nodes without
any IR resolution or naming. Local schema references are followed and
cached per pointer, so every component has exactly one RawSchema and
recursive components point back to themselves.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import DocumentDecodeError
from .nodes import (
    RawDocument,
    RawMediaType,
    RawOperation,
    RawParameter,
    RawPath,
    RawRequestBody,
    RawResponse,
    RawSchema,
    RawSchemaRef,
)
from .reference_resolver import ReferenceResolver, escape_pointer_token

logger = logging.getLogger(__name__)


class OpenAPIParser:
    """Parses an OpenAPI 3 document into raw nodes."""

    HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

    PARAMETER_LOCATIONS = {"query", "path", "header", "cookie"}

    # Default serialization style per parameter location
    DEFAULT_STYLES = {
        "query": "form",
        "cookie": "form",
        "path": "simple",
        "header": "simple",
    }

    def __init__(self):
        self.refs: ReferenceResolver | None = None
        self._schema_cache: dict[str, RawSchema] = {}

    def parse(self, document: dict[str, Any]) -> RawDocument:
        """
        Parse an OpenAPI document.

        Args:
            document: The decoded JSON/YAML document

        Returns:
            RawDocument with component schemas and paths
        """
        if not isinstance(document, dict):
            raise DocumentDecodeError("OpenAPI document must be a mapping")

        self.refs = ReferenceResolver(document)
        self._schema_cache = {}

        raw_doc = RawDocument()

        components = document.get("components") or {}
        for name, schema in (components.get("schemas") or {}).items():
            pointer = f"#/components/schemas/{escape_pointer_token(name)}"
            if isinstance(schema, dict) and "$ref" in schema:
                # The component is an alias of another one
                raw_doc.schemas[name] = self._parse_schema_ref(schema, pointer)
            else:
                raw_doc.schemas[name] = RawSchemaRef(ref=pointer, value=self._schema_at(pointer))

        for path_string, item in (document.get("paths") or {}).items():
            if path_string.startswith("x-"):
                continue
            raw_doc.paths.append(self._parse_path_item(item, path_string, f"#/paths/{escape_pointer_token(path_string)}"))

        return raw_doc

    def _extract_metadata(self, value: dict[str, Any]) -> dict[str, Any]:
        """Extract x-* extension metadata."""
        return {k: v for k, v in value.items() if k.startswith("x-")}

    def _expect_mapping(self, value: Any, path: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise DocumentDecodeError(f"expected a mapping, got {type(value).__name__}", node_name=path)
        return value

    def _parse_schema_ref(self, schema: Any, path: str) -> RawSchemaRef:
        """Parse a schema that may be a $ref."""
        schema = self._expect_mapping(schema, path)

        if "$ref" in schema:
            ref = schema["$ref"]
            if not self.refs.is_local(ref):
                logger.debug("Leaving external reference %s unresolved", ref)
                return RawSchemaRef(ref=ref)
            return RawSchemaRef(ref=ref, value=self._schema_at(ref))

        return RawSchemaRef(value=self._parse_schema(schema, path))

    def _schema_at(self, pointer: str) -> RawSchema:
        """Get the cached schema body for a local pointer, parsing it once."""
        if pointer in self._schema_cache:
            return self._schema_cache[pointer]

        target, target_path = self.refs.follow(self.refs.resolve(pointer), pointer)
        if target_path in self._schema_cache:
            body = self._schema_cache[target_path]
        else:
            # Register before parsing children so recursive references find it
            body = RawSchema()
            self._schema_cache[target_path] = body
            self._parse_schema(self._expect_mapping(target, target_path), target_path, into=body)

        self._schema_cache[pointer] = body
        return body

    def _parse_schema(self, schema: dict[str, Any], path: str, into: RawSchema | None = None) -> RawSchema:
        """
        Parse an inline schema body.

        Args:
            schema: The schema dictionary
            path: Current path in the document (for error messages)
            into: Existing body to fill in, used for cached components

        Returns:
            The parsed RawSchema
        """
        body = into if into is not None else RawSchema()
        body.source_path = path
        body.metadata = self._extract_metadata(schema)

        body.type = schema.get("type", "")
        body.format = schema.get("format", "") or ""
        body.description = schema.get("description", "") or ""
        body.nullable = bool(schema.get("nullable", False))

        if "enum" in schema:
            body.enum = list(schema["enum"] or [])

        for key, attr in (("allOf", "all_of"), ("anyOf", "any_of"), ("oneOf", "one_of")):
            if key in schema:
                members = [self._parse_schema_ref(member, f"{path}/{key}/{i}") for i, member in enumerate(schema[key] or [])]
                setattr(body, attr, members)

        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            prop_path = f"{path}/properties/{escape_pointer_token(prop_name)}"
            body.properties[prop_name] = self._parse_schema_ref(prop_schema, prop_path)

        required = schema.get("required")
        if required is not None and not isinstance(required, list):
            raise DocumentDecodeError("required must be a list of property names", node_name=path)
        body.required = list(required or [])

        if schema.get("items") is not None:
            body.items = self._parse_schema_ref(schema["items"], f"{path}/items")

        additional = schema.get("additionalProperties")
        if isinstance(additional, bool):
            body.additional_properties_allowed = additional
        elif additional is not None:
            body.additional_properties = self._parse_schema_ref(additional, f"{path}/additionalProperties")

        return body

    def _parse_path_item(self, item: Any, path_string: str, path: str) -> RawPath:
        """Parse a path item (also used for callback paths)."""
        item, path = self.refs.follow(self._expect_mapping(item, path), path)
        item = self._expect_mapping(item, path)

        raw_path = RawPath(
            path_string=path_string,
            description=item.get("description", "") or "",
            source_path=path,
            metadata=self._extract_metadata(item),
        )

        for i, param in enumerate(item.get("parameters") or []):
            raw_path.parameters.append(self._parse_parameter(param, f"{path}/parameters/{i}"))

        for key, op in item.items():
            if key.lower() in self.HTTP_METHODS:
                raw_path.operations.append(self._parse_operation(op, key.upper(), f"{path}/{key}"))

        return raw_path

    def _parse_operation(self, op: Any, method: str, path: str) -> RawOperation:
        """Parse an operation object."""
        op = self._expect_mapping(op, path)

        raw_op = RawOperation(
            method=method,
            operation_id=op.get("operationId", "") or "",
            description=op.get("description", "") or "",
            source_path=path,
            metadata=self._extract_metadata(op),
        )

        for i, param in enumerate(op.get("parameters") or []):
            raw_op.parameters.append(self._parse_parameter(param, f"{path}/parameters/{i}"))

        if op.get("requestBody") is not None:
            body, body_path = self.refs.follow(op["requestBody"], f"{path}/requestBody")
            body = self._expect_mapping(body, body_path)
            raw_op.request_body = RawRequestBody(
                description=body.get("description", "") or "",
                required=bool(body.get("required", False)),
                content=self._parse_content(body.get("content"), body_path),
                source_path=body_path,
                metadata=self._extract_metadata(body),
            )

        for code, response in (op.get("responses") or {}).items():
            code = str(code)
            if code.startswith("x-"):
                continue
            response, res_path = self.refs.follow(response, f"{path}/responses/{code}")
            response = self._expect_mapping(response, res_path)
            raw_op.responses.append(
                RawResponse(
                    code=code,
                    description=response.get("description", "") or "",
                    content=self._parse_content(response.get("content"), res_path),
                    source_path=res_path,
                    metadata=self._extract_metadata(response),
                )
            )

        for event, callback in (op.get("callbacks") or {}).items():
            callback, cb_path = self.refs.follow(callback, f"{path}/callbacks/{escape_pointer_token(event)}")
            callback = self._expect_mapping(callback, cb_path)
            raw_op.callbacks[event] = [
                self._parse_path_item(cb_item, expression, f"{cb_path}/{escape_pointer_token(expression)}")
                for expression, cb_item in callback.items()
                if not expression.startswith("x-")
            ]

        return raw_op

    def _parse_parameter(self, param: Any, path: str) -> RawParameter:
        """Parse a parameter object, applying the default serialization."""
        param, path = self.refs.follow(self._expect_mapping(param, path), path)
        param = self._expect_mapping(param, path)

        location = param.get("in", "")
        if location not in self.PARAMETER_LOCATIONS:
            raise DocumentDecodeError(f"invalid parameter location: {location!r}", node_name=path)

        style = param.get("style") or self.DEFAULT_STYLES[location]
        explode = param.get("explode")
        if explode is None:
            explode = style == "form"

        raw_param = RawParameter(
            name=param.get("name", "") or "",
            location=location,
            description=param.get("description", "") or "",
            required=bool(param.get("required", False)),
            style=style,
            explode=bool(explode),
            source_path=path,
            metadata=self._extract_metadata(param),
        )

        if param.get("schema") is not None:
            raw_param.schema = self._parse_schema_ref(param["schema"], f"{path}/schema")

        raw_param.content = self._parse_content(param.get("content"), path)

        return raw_param

    def _parse_content(self, content: Any, path: str) -> list[RawMediaType]:
        """Parse a content map (content type -> media type object)."""
        media_types = []
        for content_type, media in (content or {}).items():
            media = self._expect_mapping(media, f"{path}/content/{escape_pointer_token(content_type)}")
            schema = None
            if media.get("schema") is not None:
                schema = self._parse_schema_ref(media["schema"], f"{path}/content/{escape_pointer_token(content_type)}/schema")
            media_types.append(RawMediaType(content_type=content_type, schema=schema))
        return media_types
