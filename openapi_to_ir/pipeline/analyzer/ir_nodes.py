"""
IR (Intermediate Representation) node definitions.

These nodes represent the resolved document, ready for code
generation. A Schema is a tagged variant: its Variant decides which
child slots are meaningful. After extraction every standalone type
lives in Spec.schemas and other places refer to it by name.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Variant(Enum):
    """Structural shape of a schema."""

    PRIMITIVE = "primitive"  # scalar, see PrimitiveType
    ANY = "any"  # unconstrained value
    ARRAY = "array"  # children: [item]
    MAP = "map"  # children: [key, value]
    STRUCT = "struct"  # properties, plus optional additional_props
    ALL_OF = "allOf"  # children: all describe the value
    ANY_OF = "anyOf"  # children: at least one matches
    ONE_OF = "oneOf"  # children: exactly one matches


# Variants that can already express an absent/empty value
NIL_CAPABLE_VARIANTS = frozenset(
    {
        Variant.MAP,
        Variant.ARRAY,
        Variant.ANY_OF,
        Variant.ONE_OF,
        Variant.ANY,
    }
)


class PrimitiveType(Enum):
    """Concrete scalar types."""

    STRING = "string"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    BYTE = "byte"
    TIMESTAMP = "timestamp"


class WalkControl(Enum):
    """Value a walker may return to steer the traversal."""

    CONTINUE = "continue"
    STOP = "stop"


class SchemaPath(tuple):
    """Chain of schemas from the walked root down to the visited node."""

    @property
    def first(self) -> Schema | None:
        return self[0] if self else None

    @property
    def last(self) -> Schema | None:
        return self[-1] if self else None

    @property
    def ancestors(self) -> tuple[Schema, ...]:
        return tuple(self[:-1])

    def names(self) -> list[str]:
        return [s.name for s in self]


SchemaWalker = Callable[[SchemaPath], "WalkControl | None"]


@dataclass
class Schema:
    """A resolved type description.

    A schema with variant None is a name-only reference that was never
    expanded; only its name is known.
    """

    name: str = ""
    original_name: str = ""  # Name in the source document, used for matching
    field_name: str = ""  # Property this schema sits in, if any
    description: str = ""
    comments: list[str] = field(default_factory=list)

    nullable: bool = False
    create: bool = False  # Emit as a standalone type instead of inlining

    # Serialization/metadata directives, e.g. {"json": ["id", "omitempty"]}
    tags: dict[str, list[str]] = field(default_factory=dict)

    variant: Variant | None = None
    primitive_type: PrimitiveType | None = None

    # Literal values, empty unless this is an enumeration
    enum: list[Any] = field(default_factory=list)

    # ARRAY: [item], MAP: [key, value], ALL_OF/ANY_OF/ONE_OF: members
    children: list[Schema] = field(default_factory=list)

    # STRUCT: property name -> schema
    properties: dict[str, Schema] = field(default_factory=dict)

    # Open-ended extension slot of a STRUCT
    additional_props: Schema | None = None
    additional_props_name: str = ""

    def as_primitive(self, primitive_type: PrimitiveType | None) -> Schema:
        self.variant = Variant.PRIMITIVE
        self.primitive_type = primitive_type
        return self

    def as_any(self) -> Schema:
        self.variant = Variant.ANY
        self.children = []
        self.properties = {}
        return self

    def as_array(self, item: Schema) -> Schema:
        self.variant = Variant.ARRAY
        self.children = [item]
        return self

    def as_map(self, key: Schema, value: Schema) -> Schema:
        """Turn the schema into a map; an extension slot becomes the value."""
        self.variant = Variant.MAP
        self.children = [key, value]
        self.properties = {}
        if self.additional_props is value:
            self.additional_props = None
            self.additional_props_name = ""
        return self

    def as_struct(self, properties: dict[str, Schema]) -> Schema:
        self.variant = Variant.STRUCT
        self.properties = properties
        return self

    def as_compound(self, variant: Variant, children: list[Schema]) -> Schema:
        if variant not in (Variant.ALL_OF, Variant.ANY_OF, Variant.ONE_OF):
            raise ValueError(f"{variant} is not a compound variant")
        self.variant = variant
        self.children = children
        return self

    @property
    def item(self) -> Schema | None:
        """Element type of an ARRAY."""
        if self.variant is Variant.ARRAY and self.children:
            return self.children[0]
        return None

    @property
    def key(self) -> Schema | None:
        """Key type of a MAP."""
        if self.variant is Variant.MAP and len(self.children) == 2:
            return self.children[0]
        return None

    @property
    def value(self) -> Schema | None:
        """Value type of a MAP."""
        if self.variant is Variant.MAP and len(self.children) == 2:
            return self.children[1]
        return None

    def is_reference(self) -> bool:
        """Whether the schema is a name-only reference to another type."""
        return bool(self.name) and not self.create

    def can_be_nil(self) -> bool:
        """Whether the variant can already represent an absent value."""
        return self.variant in NIL_CAPABLE_VARIANTS

    def needs_null_wrapper(self) -> bool:
        """Whether a nullable value of this schema needs a separate wrapper."""
        return self.nullable and not self.can_be_nil()

    def add_comments(self, *comments: str) -> Schema:
        self.comments.extend(comments)
        return self

    def copy(self) -> Schema:
        """Return a deep structural copy."""
        return copy.deepcopy(self)

    def iter_children(self) -> Iterator[Schema]:
        """Yield direct children, the extension slot first."""
        if self.additional_props is not None:
            yield self.additional_props
        yield from self.children
        yield from self.properties.values()

    def iter_paths(self, bottom_up: bool = False) -> Iterator[SchemaPath]:
        """Yield the path to every reachable schema exactly once.

        Top-down order is a lazy pre-order traversal. Bottom-up order is
        the reverse of it, so every node comes after all its descendants.
        """
        if bottom_up:
            yield from reversed(list(self._iter_preorder(SchemaPath())))
        else:
            yield from self._iter_preorder(SchemaPath())

    def _iter_preorder(self, parent: SchemaPath) -> Iterator[SchemaPath]:
        path = SchemaPath((*parent, self))
        yield path
        for child in self.iter_children():
            yield from child._iter_preorder(path)

    def walk(self, walker: SchemaWalker, bottom_up: bool = False) -> bool:
        """Call walker for every reachable schema.

        Returns:
            False if the walker stopped the traversal, True otherwise
        """
        for path in self.iter_paths(bottom_up):
            if walker(path) is WalkControl.STOP:
                return False
        return True


def walk_schema(schema: Schema | None, walker: SchemaWalker, bottom_up: bool = False) -> bool:
    """Walk a schema that may be missing."""
    if schema is None:
        return True
    return schema.walk(walker, bottom_up)


class ParameterLocation(str, Enum):
    """Where a parameter is expected in the request."""

    QUERY = "query"
    PATH = "path"
    HEADER = "header"
    COOKIE = "cookie"
    BODY = "body"


class SerializationStyle(str, Enum):
    SIMPLE = "simple"
    LABEL = "label"
    MATRIX = "matrix"
    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


@dataclass
class ParameterSerialization:
    style: SerializationStyle = SerializationStyle.SIMPLE
    explode: bool = False


@dataclass
class Parameter:
    """A parameter of an operation."""

    name: str = ""
    description: str = ""
    location: ParameterLocation = ParameterLocation.QUERY
    content_type: str = ""  # For body and multi-representation parameters
    schema: Schema | None = None
    serialization: ParameterSerialization = field(default_factory=ParameterSerialization)
    required: bool = False

    def needs_null_wrapper(self) -> bool:
        if self.schema is None or self.schema.can_be_nil():
            return False
        return not self.required or self.schema.variant in (Variant.STRUCT, Variant.ALL_OF)


@dataclass
class Response:
    """One expected response of an operation."""

    name: str = ""
    description: str = ""
    code: str = ""  # "200", "5xx" or "default"
    content_type: str = ""
    schema: Schema | None = None

    def needs_null_wrapper(self) -> bool:
        return self.schema is not None and self.schema.variant in (Variant.STRUCT, Variant.ALL_OF)


@dataclass
class Operation:
    """An HTTP operation."""

    method: str = ""
    name: str = ""
    operation_id: str = ""
    description: str = ""
    comments: list[str] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    responses: list[Response] = field(default_factory=list)

    # Event name -> paths called back asynchronously
    callbacks: dict[str, list[Path]] = field(default_factory=dict)

    def iter_schemas(self) -> Iterator[Schema]:
        """Yield the root schema of every parameter and response."""
        for param in self.parameters:
            if param.schema is not None:
                yield param.schema
        for res in self.responses:
            if res.schema is not None:
                yield res.schema


@dataclass
class Path:
    """A route template and its operations."""

    path_string: str = ""  # e.g. "/pets/{id}/profile"
    name: str = ""
    description: str = ""
    comments: list[str] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)


@dataclass
class Spec:
    """The complete IR of an OpenAPI document."""

    # Standalone types, in extraction order
    schemas: list[Schema] = field(default_factory=list)

    paths: list[Path] = field(default_factory=list)

    def find_schema(self, name: str) -> Schema | None:
        """Get a registry entry by name."""
        for schema in self.schemas:
            if schema.name == name:
                return schema
        return None

    def has_schema(self, name: str) -> bool:
        return self.find_schema(name) is not None

    def iter_operations(self, include_callbacks: bool = True) -> Iterator[Operation]:
        """Yield every operation, callback operations after their owner."""
        for path in self.paths:
            for op in path.operations:
                yield op
                if include_callbacks:
                    yield from _iter_callback_operations(op)

    def iter_operation_schemas(self) -> Iterator[Schema]:
        """Yield parameter and response root schemas, callbacks included."""
        for op in self.iter_operations():
            yield from op.iter_schemas()


def _iter_callback_operations(op: Operation) -> Iterator[Operation]:
    for cb_paths in op.callbacks.values():
        for cb_path in cb_paths:
            for cb_op in cb_path.operations:
                yield cb_op
                yield from _iter_callback_operations(cb_op)
