"""
Raw node definitions for a decoded OpenAPI document.

These nodes represent the parsed structure of the document before any
IR resolution. Schema references are already followed, so a recursive
component forms a cycle of RawSchema objects; the resolver is what
turns that graph into a finite tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RawNode:
    """Base class for all raw nodes."""

    # Original source location in the document (for error messages)
    source_path: str = ""

    # Raw extension metadata (x-* keys)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class RawSchema(RawNode):
    """An inline schema body."""

    type: Any = ""  # Shape tag: "", "object", "array", "string", ...
    format: str = ""
    description: str = ""
    nullable: bool = False
    enum: list[Any] | None = None

    all_of: list[RawSchemaRef] | None = None
    any_of: list[RawSchemaRef] | None = None
    one_of: list[RawSchemaRef] | None = None

    properties: dict[str, RawSchemaRef] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    items: RawSchemaRef | None = None

    # additionalProperties: a schema, or only a boolean
    additional_properties: RawSchemaRef | None = None
    additional_properties_allowed: bool | None = None


@dataclass(eq=False, repr=False)
class RawSchemaRef:
    """A schema reference: a $ref string, an inline body, or both.

    A ref without a value is a name-only pointer to a type declared
    elsewhere. Compared by identity since bodies may form cycles.
    """

    ref: str = ""
    value: RawSchema | None = None

    def __repr__(self) -> str:
        body = "inline" if self.value is not None else "unresolved"
        return f"RawSchemaRef(ref={self.ref!r}, {body})"

    @property
    def ref_name(self) -> str:
        """Last segment of the reference, e.g. "Pet" for "#/components/schemas/Pet"."""
        if not self.ref:
            return ""
        return self.ref.rstrip("/").split("/")[-1]


@dataclass
class RawMediaType:
    content_type: str = ""
    schema: RawSchemaRef | None = None


@dataclass
class RawParameter(RawNode):
    name: str = ""
    location: str = ""  # "query", "path", "header", "cookie"
    description: str = ""
    required: bool = False
    style: str = ""
    explode: bool = False
    schema: RawSchemaRef | None = None
    content: list[RawMediaType] = field(default_factory=list)


@dataclass
class RawRequestBody(RawNode):
    description: str = ""
    required: bool = False
    content: list[RawMediaType] = field(default_factory=list)


@dataclass
class RawResponse(RawNode):
    code: str = ""
    description: str = ""
    content: list[RawMediaType] = field(default_factory=list)


@dataclass
class RawOperation(RawNode):
    method: str = ""
    operation_id: str = ""
    description: str = ""
    parameters: list[RawParameter] = field(default_factory=list)
    request_body: RawRequestBody | None = None
    responses: list[RawResponse] = field(default_factory=list)

    # Event name -> callback paths
    callbacks: dict[str, list[RawPath]] = field(default_factory=dict)


@dataclass
class RawPath(RawNode):
    path_string: str = ""
    description: str = ""
    operations: list[RawOperation] = field(default_factory=list)

    # Parameters shared by every operation of the path
    parameters: list[RawParameter] = field(default_factory=list)


@dataclass
class RawDocument:
    """Root of the decoded document."""

    # Component name -> schema, in document order
    schemas: dict[str, RawSchemaRef] = field(default_factory=dict)

    paths: list[RawPath] = field(default_factory=list)
