"""
Normalization passes: inline simplification and deterministic ordering.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import Operation, Path, PrimitiveType, Schema, SchemaPath, Spec, Variant, walk_schema


def _simplify(path: SchemaPath) -> None:
    node = path.last
    if node.name:
        return

    # Anonymous types cannot carry custom marshaling for the extension slot
    if node.additional_props is not None:
        node.as_map(Schema().as_primitive(PrimitiveType.STRING), node.additional_props)

    if node.variant in (Variant.ANY_OF, Variant.ONE_OF):
        node.as_any()


def simplify_inline_schemas(spec: Spec) -> None:
    """Turn anonymous structs with an extension slot into maps and anonymous alternatives into Any."""
    for entry in spec.schemas:
        entry.walk(_simplify, bottom_up=True)

    for root in spec.iter_operation_schemas():
        walk_schema(root, _simplify, bottom_up=True)


def _by_name(item) -> str:
    return item.name


def _order_operation(op: Operation) -> None:
    op.parameters.sort(key=_by_name)
    op.responses.sort(key=_by_name)

    op.callbacks = {event: op.callbacks[event] for event in sorted(op.callbacks)}
    for cb_paths in op.callbacks.values():
        cb_paths.sort(key=_by_name)
        for cb_path in cb_paths:
            _order_path(cb_path)


def _order_path(path: Path) -> None:
    path.operations.sort(key=_by_name)
    for op in path.operations:
        _order_operation(op)


def order_resources(spec: Spec) -> None:
    """Stably sort paths, operations, parameters, responses and callbacks by name.

    The registry keeps its extraction order.
    """
    spec.paths.sort(key=_by_name)
    for path in spec.paths:
        _order_path(path)
