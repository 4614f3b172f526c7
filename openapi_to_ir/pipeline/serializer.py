"""
JSON-ready view of a finished Spec.

Empty fields are omitted so the output stays readable; the shape of a
schema follows its variant.
"""

from __future__ import annotations

from typing import Any

from .analyzer.ir_nodes import Operation, Parameter, Path, Response, Schema, Spec, Variant


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    """Convert a schema tree to a dictionary."""
    d: dict[str, Any] = {}
    if schema.name:
        d["name"] = schema.name
    if schema.original_name and schema.original_name != schema.name:
        d["original_name"] = schema.original_name
    if schema.field_name:
        d["field_name"] = schema.field_name
    d["variant"] = schema.variant.value if schema.variant is not None else "reference"
    if schema.primitive_type is not None:
        d["type"] = schema.primitive_type.value
    if schema.description:
        d["description"] = schema.description
    if schema.comments:
        d["comments"] = list(schema.comments)
    if schema.nullable:
        d["nullable"] = True
    if schema.create:
        d["create"] = True
    if schema.tags:
        d["tags"] = {k: list(v) for k, v in schema.tags.items()}
    if schema.enum:
        d["enum"] = list(schema.enum)

    if schema.variant is Variant.ARRAY:
        d["item"] = schema_to_dict(schema.item)
    elif schema.variant is Variant.MAP:
        d["key"] = schema_to_dict(schema.key)
        d["value"] = schema_to_dict(schema.value)
    elif schema.variant is Variant.STRUCT:
        d["properties"] = {name: schema_to_dict(prop) for name, prop in schema.properties.items()}
        if schema.additional_props is not None:
            d["additional_properties"] = {
                "name": schema.additional_props_name,
                "schema": schema_to_dict(schema.additional_props),
            }
    elif schema.variant in (Variant.ALL_OF, Variant.ANY_OF, Variant.ONE_OF):
        d["members"] = [schema_to_dict(child) for child in schema.children]

    return d


def _optional_schema(schema: Schema | None) -> dict[str, Any] | None:
    return schema_to_dict(schema) if schema is not None else None


def parameter_to_dict(param: Parameter) -> dict[str, Any]:
    return {
        "name": param.name,
        "description": param.description,
        "in": param.location.value,
        "content_type": param.content_type,
        "required": param.required,
        "style": param.serialization.style.value,
        "explode": param.serialization.explode,
        "schema": _optional_schema(param.schema),
    }


def response_to_dict(res: Response) -> dict[str, Any]:
    return {
        "name": res.name,
        "description": res.description,
        "code": res.code,
        "content_type": res.content_type,
        "schema": _optional_schema(res.schema),
    }


def operation_to_dict(op: Operation) -> dict[str, Any]:
    d = {
        "name": op.name,
        "method": op.method,
        "operation_id": op.operation_id,
        "description": op.description,
        "comments": list(op.comments),
        "parameters": [parameter_to_dict(p) for p in op.parameters],
        "responses": [response_to_dict(r) for r in op.responses],
    }
    if op.callbacks:
        d["callbacks"] = {event: [path_to_dict(p) for p in paths] for event, paths in op.callbacks.items()}
    return d


def path_to_dict(path: Path) -> dict[str, Any]:
    return {
        "name": path.name,
        "path": path.path_string,
        "description": path.description,
        "operations": [operation_to_dict(op) for op in path.operations],
    }


def spec_to_dict(spec: Spec) -> dict[str, Any]:
    """
    Convert a Spec to a JSON-serializable dictionary.

    Args:
        spec: The finished Spec

    Returns:
        Dictionary with "schemas" and "paths" lists
    """
    return {
        "schemas": [schema_to_dict(s) for s in spec.schemas],
        "paths": [path_to_dict(p) for p in spec.paths],
    }
