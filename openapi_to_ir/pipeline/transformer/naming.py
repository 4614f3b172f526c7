"""
Name synthesis for paths, operations and responses.

Names are derived only from the route template, the method, the
callback event and the response code, so every run produces the same
names for the same input.
"""

from __future__ import annotations

from collections.abc import Iterable

from ...utils import path_to_name, strip_runtime_expressions, to_camel_case, to_pascal_case
from ..analyzer.ir_nodes import Operation, Path, Spec
from ..config import OperationNameStyle
from ..errors import SequencingViolationError


def _name_callback_paths(operations: Iterable[Operation]) -> None:
    for op in operations:
        for event, cb_paths in op.callbacks.items():
            for cb_path in cb_paths:
                if not cb_path.name:
                    name = path_to_name(strip_runtime_expressions(cb_path.path_string))
                    cb_path.name = to_pascal_case(event) + (name or "RootPath")
                _name_callback_paths(cb_path.operations)


def name_paths(spec: Spec) -> None:
    """Give every unnamed path and callback path a name built from its route."""
    for path in spec.paths:
        _name_callback_paths(path.operations)

        if path.name:
            continue
        path.name = path_to_name(path.path_string) or "RootPath"


def format_operation_name(method: str, path_name: str, style: OperationNameStyle) -> str:
    """Combine method and path name, e.g. ("GET", "PetsWithId") -> "GetPetsWithId"."""
    raw = method.lower() + path_name
    if style is OperationNameStyle.CAMEL:
        return to_camel_case(raw)
    return to_pascal_case(raw)


def _name_operations_of(path: Path, style: OperationNameStyle) -> None:
    if not path.name:
        raise SequencingViolationError(f"path {path.path_string} has no name", node_name=path.path_string)

    for op in path.operations:
        if not op.name:
            op.name = format_operation_name(op.method, path.name, style)
        for cb_paths in op.callbacks.values():
            for cb_path in cb_paths:
                _name_operations_of(cb_path, style)


def name_operations(spec: Spec, style: OperationNameStyle = OperationNameStyle.PASCAL) -> None:
    """
    Name every unnamed operation after its method and path.

    Raises:
        SequencingViolationError: If a path has not been named yet
    """
    for path in spec.paths:
        _name_operations_of(path, style)


def name_responses(spec: Spec) -> None:
    """
    Normalize explicit response names and synthesize the missing ones.

    Raises:
        SequencingViolationError: If an operation has not been named yet
    """
    for op in spec.iter_operations():
        if not op.name:
            raise SequencingViolationError("operation name is empty", node_name=op.operation_id or op.method)

        for res in op.responses:
            if res.name:
                res.name = to_pascal_case(res.name)
                continue
            res.name = op.name + "Response" + to_pascal_case(res.code)
