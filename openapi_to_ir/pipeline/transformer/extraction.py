"""
Extraction passes.

Moves every schema that must become a standalone type into the flat
registry, leaving a name-only reference behind. Both passes are
idempotent: a second run finds everything registered and changes
nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...utils import to_pascal_case
from ..analyzer.ir_nodes import Schema, SchemaPath, Spec, Variant, walk_schema
from ..errors import SequencingViolationError
from .context import RunContext

logger = logging.getLogger(__name__)


def register_schema(spec: Spec, schema: Schema) -> bool:
    """
    Append a creatable copy of schema to the registry unless the name is taken.

    Returns:
        True if the schema was registered
    """
    if spec.has_schema(schema.name):
        return False
    entry = schema.copy()
    entry.create = True
    spec.schemas.append(entry)
    logger.debug("Registered schema %s", entry.name)
    return True


def extract_schemas(spec: Spec) -> None:
    """Register every named creatable schema and demote it in its tree."""

    def extractor(skip_root: bool):
        def extract(path: SchemaPath) -> None:
            # Registry roots are already extracted
            if skip_root and len(path) < 2:
                return
            node = path.last
            if node.create and node.name:
                register_schema(spec, node)
                node.create = False

        return extract

    for root in list(spec.schemas):
        root.walk(extractor(skip_root=True), bottom_up=True)

    for root in list(spec.iter_operation_schemas()):
        root.walk(extractor(skip_root=False), bottom_up=True)


def _fragment_comment(child: Schema, parent: Schema) -> str:
    if parent.name:
        return f"{child.name} is a part of {parent.name}."
    return f"{child.name} is a part of an anonymous composition."


def _fragment_extractor(spec: Spec, context: RunContext):
    def extract(path: SchemaPath) -> None:
        parent = path.last
        if parent.variant is not Variant.ALL_OF or not parent.create:
            return

        for i, child in enumerate(parent.children):
            # References to types declared elsewhere
            if child.variant is None:
                continue

            if child.name and spec.has_schema(child.name):
                child.create = False
                continue

            if not child.name:
                if parent.name:
                    child.name = f"{parent.name}Fragment{i}"
                else:
                    child.name = context.next_fragment_name()

            if spec.has_schema(child.name):
                child.create = False
                continue

            child.create = True
            entry = child.copy().add_comments(_fragment_comment(child, parent))
            spec.schemas.append(entry)
            child.create = False

            # A fragment can itself be an all-of
            walk_schema(entry, extract, bottom_up=True)

    return extract


def extract_fragments_from(spec: Spec, roots: Iterable[Schema], context: RunContext) -> None:
    """Register the members of every creatable all-of reachable from roots."""
    extract = _fragment_extractor(spec, context)
    for root in roots:
        walk_schema(root, extract, bottom_up=True)


def extract_all_of_fragments(spec: Spec, context: RunContext) -> None:
    """Register the members of every creatable all-of as standalone types."""
    extract_fragments_from(spec, list(spec.schemas), context)
    extract_fragments_from(spec, list(spec.iter_operation_schemas()), context)


def promote_anonymous_roots(spec: Spec, context: RunContext) -> None:
    """
    Name and register parameter and response root schemas marked for creation.

    Response roots take the response name, parameter roots the operation
    name followed by the parameter name. Must run after response naming.

    Raises:
        SequencingViolationError: If an operation or response has no name yet
    """
    promoted: list[Schema] = []

    def promote(schema: Schema | None, name: str) -> None:
        if schema is None or not schema.create or schema.name:
            return
        schema.name = name
        if not schema.original_name:
            schema.original_name = name
        if register_schema(spec, schema):
            promoted.append(spec.schemas[-1])
        schema.create = False

    for op in spec.iter_operations():
        if not op.name:
            raise SequencingViolationError("operation has no name", node_name=op.operation_id or op.method)
        for param in op.parameters:
            promote(param.schema, op.name + to_pascal_case(param.name))
        for res in op.responses:
            if not res.name:
                raise SequencingViolationError("response has no name", node_name=res.code, ancestors=[op.name])
            promote(res.schema, res.name)

    extract_fragments_from(spec, promoted, context)
