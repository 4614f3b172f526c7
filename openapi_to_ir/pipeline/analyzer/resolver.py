"""
Raw-to-IR schema resolver.

Turns a raw schema reference into a Schema tree: applies per-node
overrides, breaks reference cycles and maps every raw shape onto one
of the IR variants.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..config import ResolverConfig
from ..errors import MissingInputError, OverrideDecodeError, UnrecognizedShapeError
from ..schema_ast.nodes import RawSchema, RawSchemaRef
from .ir_nodes import PrimitiveType, Schema, Variant

logger = logging.getLogger(__name__)


@dataclass
class SchemaOverride:
    """Per-node directives read from the extension metadata."""

    type: str = ""  # Replaces the schema name, e.g. an existing external type
    create: bool | None = None  # None when not specified
    can_be_nil: bool = False  # Only used together with create: false
    tags: dict[str, list[str]] = field(default_factory=dict)

    @staticmethod
    def from_metadata(metadata: dict[str, Any] | None, key: str) -> SchemaOverride | None:
        """
        Decode the override stored under key.

        Args:
            metadata: The x-* metadata bag of a raw node
            key: The extension name to read

        Returns:
            The override, or None if the node has none

        Raises:
            OverrideDecodeError: If the stored value has the wrong shape
        """
        if not metadata or key not in metadata:
            return None

        raw = metadata[key]
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise OverrideDecodeError(f"{key} must be a mapping, got {type(raw).__name__}")

        override = SchemaOverride()

        type_name = raw.get("type")
        if type_name is not None:
            if not isinstance(type_name, str):
                raise OverrideDecodeError(f"{key}.type must be a string")
            override.type = type_name

        create = raw.get("create")
        if create is not None:
            if not isinstance(create, bool):
                raise OverrideDecodeError(f"{key}.create must be a boolean")
            override.create = create

        can_be_nil = raw.get("canBeNil", raw.get("can_be_nil"))
        if can_be_nil is not None:
            if not isinstance(can_be_nil, bool):
                raise OverrideDecodeError(f"{key}.canBeNil must be a boolean")
            override.can_be_nil = can_be_nil

        tags = raw.get("tags")
        if tags is not None:
            if not isinstance(tags, dict):
                raise OverrideDecodeError(f"{key}.tags must be a mapping")
            for tag_key, values in tags.items():
                if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                    raise OverrideDecodeError(f"{key}.tags.{tag_key} must be a list of strings")
                override.tags[str(tag_key)] = list(values)

        return override


class SchemaResolver:
    """Resolves raw schema references into IR schemas."""

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()

    def read_override(self, metadata: dict[str, Any] | None, node_name: str = "") -> SchemaOverride | None:
        """Read the override of a node, ignoring malformed ones."""
        try:
            return SchemaOverride.from_metadata(metadata, self.config.extension_name)
        except OverrideDecodeError as e:
            logger.warning("Ignoring override of %s: %s", node_name or "<anonymous>", e.message)
            return None

    def resolve(self, raw_ref: RawSchemaRef | None, ancestors: Sequence[Schema] = ()) -> Schema:
        """
        Resolve a raw schema reference.

        Args:
            raw_ref: The reference to resolve
            ancestors: Schemas being resolved above this one, root first

        Returns:
            The resolved schema tree

        Raises:
            MissingInputError: If the reference or a required part of it is absent
            UnrecognizedShapeError: If a shape tag maps to no variant
        """
        if raw_ref is None:
            raise MissingInputError("schema", ancestors=[a.name for a in ancestors])

        schema = Schema()
        if raw_ref.ref:
            schema.name = raw_ref.ref_name
            schema.original_name = raw_ref.ref_name

        raw = raw_ref.value
        if raw is None:
            if not raw_ref.ref:
                raise MissingInputError("schema", ancestors=[a.name for a in ancestors])
            # Only the name of the referenced type is known
            return schema

        schema.description = raw.description

        override = self.read_override(raw.metadata, schema.name)
        if override is not None:
            if override.type:
                schema.name = override.type
            if override.create is True:
                schema.create = True
            elif override.create is False and schema.name:
                # An existing type, nothing to resolve
                return schema.as_any() if override.can_be_nil else schema.as_primitive(None)

        if schema.name:
            for ancestor in ancestors:
                if ancestor.name == schema.name:
                    return ancestor.copy()

        if override is not None and override.tags:
            schema.tags = {k: list(v) for k, v in override.tags.items()}

        schema.nullable = raw.nullable

        chain = (*ancestors, schema)

        if raw.all_of:
            return schema.as_compound(Variant.ALL_OF, self._resolve_members(raw.all_of, chain))
        if raw.any_of:
            return schema.as_compound(Variant.ANY_OF, self._resolve_members(raw.any_of, chain))
        if raw.one_of:
            return schema.as_compound(Variant.ONE_OF, self._resolve_members(raw.one_of, chain))

        if raw.enum is not None:
            schema.enum = copy.deepcopy(raw.enum)

        return self._resolve_shape(schema, raw, chain)

    def _resolve_members(self, members: list[RawSchemaRef], chain: tuple[Schema, ...]) -> list[Schema]:
        return [self.resolve(member, chain) for member in members]

    def _resolve_shape(self, schema: Schema, raw: RawSchema, chain: tuple[Schema, ...]) -> Schema:
        """Map the raw shape tag onto a variant."""
        shape = raw.type
        if not isinstance(shape, str):
            raise UnrecognizedShapeError(
                f"unsupported schema type {shape!r}",
                node_name=schema.name,
                ancestors=[a.name for a in chain[:-1]],
            )

        shape = shape.strip()
        if shape == "":
            return schema.as_any()
        if shape == "object":
            return self._resolve_object(schema, raw, chain)
        if shape == "array":
            if raw.items is None:
                raise MissingInputError("array items", node_name=schema.name, ancestors=[a.name for a in chain[:-1]])
            return schema.as_array(self.resolve(raw.items, chain))
        if shape == "string":
            if raw.format in ("date", "date-time"):
                return schema.as_primitive(PrimitiveType.TIMESTAMP)
            if raw.format in ("byte", "binary"):
                return schema.as_array(Schema().as_primitive(PrimitiveType.BYTE))
            return schema.as_primitive(PrimitiveType.STRING)
        if shape == "number":
            if raw.format == "float":
                return schema.as_primitive(PrimitiveType.FLOAT32)
            return schema.as_primitive(PrimitiveType.FLOAT64)
        if shape == "integer":
            if raw.format == "int32":
                return schema.as_primitive(PrimitiveType.INT32)
            if raw.format == "int64":
                return schema.as_primitive(PrimitiveType.INT64)
            return schema.as_primitive(PrimitiveType.INT)
        if shape == "boolean":
            return schema.as_primitive(PrimitiveType.BOOL)

        raise UnrecognizedShapeError(
            f"unsupported schema type {shape!r}",
            node_name=schema.name,
            ancestors=[a.name for a in chain[:-1]],
        )

    def _resolve_object(self, schema: Schema, raw: RawSchema, chain: tuple[Schema, ...]) -> Schema:
        """Resolve properties and the extension slot of an object."""
        properties: dict[str, Schema] = {}
        for prop_name, prop_ref in raw.properties.items():
            prop = self.resolve(prop_ref, chain)
            prop.field_name = prop_name
            # Optional properties are nullable unless absence is already representable
            if prop_name not in raw.required and not prop.can_be_nil():
                prop.nullable = True
            properties[prop_name] = prop

        extension = None
        if raw.additional_properties is not None:
            extension = self.resolve(raw.additional_properties, chain)
        elif raw.additional_properties_allowed:
            extension = Schema().as_any()

        if extension is None:
            return schema.as_struct(properties)

        if not properties:
            return schema.as_map(Schema().as_primitive(PrimitiveType.STRING), extension)

        extension.field_name = self.config.additional_properties_name
        schema.additional_props = extension
        schema.additional_props_name = self.config.additional_properties_name
        return schema.as_struct(properties)
