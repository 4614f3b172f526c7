"""
Error types raised by the IR pipeline.

Every error carries the name of the node being processed and the chain of
ancestor names, so a failure can be diagnosed without re-running.
"""

from __future__ import annotations

from collections.abc import Iterable


class IRError(Exception):
    """Base class for all pipeline errors.

    Attributes:
        node_name: Name of the node being processed, if any
        ancestors: Names of the ancestors of that node, root first
    """

    def __init__(self, message: str, *, node_name: str = "", ancestors: Iterable[str] = ()):
        self.message = message
        self.node_name = node_name
        self.ancestors = [a or "<anonymous>" for a in ancestors]
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.node_name:
            context.append(f"node={self.node_name!r}")
        if self.ancestors:
            context.append("path=" + " -> ".join(self.ancestors))
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class MissingInputError(IRError):
    """Raised when a required raw reference or root input is absent."""

    def __init__(self, kind: str, **kwargs):
        self.kind = kind
        super().__init__(f"{kind} is missing", **kwargs)


class UnrecognizedShapeError(IRError):
    """Raised when a raw schema's shape tag does not map to any variant."""

    pass


class SequencingViolationError(IRError):
    """Raised when a pass finds an entity an earlier pass should have named.

    This signals a pass-ordering bug, not bad input.
    """

    pass


class OverrideDecodeError(IRError):
    """Raised when an override metadata bag has the wrong shape.

    Callers treat this as non-fatal: the override is ignored.
    """

    pass


class TagTemplateError(IRError):
    """Raised when a configured tag template cannot be parsed or rendered."""

    pass


class DocumentDecodeError(IRError):
    """Raised when the OpenAPI document itself cannot be decoded.

    This can happen when:
    - The document is not a mapping
    - A local $ref points nowhere
    - A parameter declares an unknown location
    """

    pass
