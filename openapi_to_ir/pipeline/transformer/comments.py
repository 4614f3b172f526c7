"""
Operation comments listing the method, route, parameters and responses.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import Operation, Path, Spec
from ..config import TransformerConfig


def _sentence(text: str) -> str:
    text = text.rstrip("\n")
    if text.endswith("."):
        text = text[:-1]
    return text + "."


def _comment_operation(op: Operation, path: Path, with_descriptions: bool) -> None:
    op.comments.append(f'{op.name} is the "{op.method}" operation for path "{path.path_string}".')

    if with_descriptions and op.description:
        op.comments.extend(["", f"Description: {_sentence(op.description)}", ""])

    if op.parameters:
        op.comments.append("Parameters:")
        for param in op.parameters:
            content_type = f" with content-type {param.content_type}" if param.content_type else ""
            op.comments.append(f'    "{param.name}" in {param.location.value}{content_type}.')
            if with_descriptions and param.description:
                op.comments.append(f"    Description: {_sentence(param.description)}")

    if op.responses:
        op.comments.append("Responses:")
        for res in op.responses:
            content_type = f": with content-type {res.content_type}" if res.content_type else ""
            name = res.schema.name if res.schema is not None and res.schema.name else res.name
            op.comments.append(f'    "{name}" ({res.code}){content_type}.')
            if with_descriptions and res.description:
                op.comments.append(f"    Description: {_sentence(res.description)}")


def _comment_path(path: Path, with_descriptions: bool) -> None:
    for op in path.operations:
        _comment_operation(op, path, with_descriptions)
        for cb_paths in op.callbacks.values():
            for cb_path in cb_paths:
                _comment_path(cb_path, with_descriptions)


def add_path_comments(spec: Spec, config: TransformerConfig) -> None:
    """Describe every operation in its comments."""
    if not config.comments:
        return

    for path in spec.paths:
        _comment_path(path, config.description_comments)
