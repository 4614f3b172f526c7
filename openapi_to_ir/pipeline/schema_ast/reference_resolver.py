"""
Reference resolver for $ref resolution.

Resolves local $ref JSON pointers to their targets in the document.
References to other documents are left unresolved: the resolver only
reports the name they point to.
"""

from __future__ import annotations

from typing import Any

from ..errors import DocumentDecodeError


def escape_pointer_token(token: str) -> str:
    """Escape a key for use inside a JSON pointer."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_pointer_token(token: str) -> str:
    """Undo escape_pointer_token."""
    return token.replace("~1", "/").replace("~0", "~")


class ReferenceResolver:
    """Resolves $ref to their targets inside one document."""

    def __init__(self, document: dict[str, Any]):
        """
        Initialize the resolver.

        Args:
            document: The whole OpenAPI document
        """
        self.document = document

    @staticmethod
    def is_local(ref: str) -> bool:
        """Check if a $ref points inside the current document."""
        return ref.startswith("#")

    def resolve(self, ref: str) -> Any:
        """
        Resolve a local $ref to the value it points to.

        Args:
            ref: A local reference such as "#/components/schemas/Pet"

        Returns:
            The referenced value

        Raises:
            DocumentDecodeError: If the reference is not local or points nowhere
        """
        if not self.is_local(ref):
            raise DocumentDecodeError(f"cannot resolve external reference {ref!r}")

        target: Any = self.document
        pointer = ref[1:].lstrip("/")
        if not pointer:
            return target

        for raw_token in pointer.split("/"):
            token = unescape_pointer_token(raw_token)
            if isinstance(target, dict) and token in target:
                target = target[token]
            elif isinstance(target, list) and token.isdigit() and int(token) < len(target):
                target = target[int(token)]
            else:
                raise DocumentDecodeError(f"reference {ref!r} points to nothing")

        return target

    def follow(self, value: Any, source_path: str) -> tuple[Any, str]:
        """
        Follow local $ref chains starting at value.

        Args:
            value: A document value that may be a {"$ref": ...} object
            source_path: Location of value in the document

        Returns:
            The first value that is not a local reference, and its location
        """
        seen: set[str] = set()
        while isinstance(value, dict) and isinstance(value.get("$ref"), str) and self.is_local(value["$ref"]):
            ref = value["$ref"]
            if ref in seen:
                raise DocumentDecodeError(f"reference cycle through {ref!r}", node_name=source_path)
            seen.add(ref)
            value = self.resolve(ref)
            source_path = ref
        return value, source_path
