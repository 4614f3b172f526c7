"""
Utility functions for the OpenAPI to IR pipeline.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# Runtime expressions in callback URLs, e.g. "{$request.body#/callbackUrl}"
_RUNTIME_EXPRESSION_PATTERN = re.compile(r"\{\$[^}]+\}")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots, slashes) to spaces."""
    for sep in ("_", "-", ".", "/"):
        text = text.replace(sep, " ")
    return text


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize the first letter of each word and join them together."""
    return "".join(word[0].upper() + word[1:] for word in words if word)


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, kebab-case or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "pet-store" -> "PetStore"
        "first 3 rows" -> "First3Rows"
        "5xx" -> "5Xx"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_camel_case(text: str) -> str:
    """Convert text to camelCase (PascalCase with a lower-case first letter)."""
    pascal = to_pascal_case(text)
    if not pascal:
        return ""
    return pascal[0].lower() + pascal[1:]


def strip_runtime_expressions(path: str) -> str:
    """Remove callback runtime expressions and the query string from a path."""
    path = _RUNTIME_EXPRESSION_PATTERN.sub("", path)
    return path.split("?", 1)[0]


def path_to_name(path: str) -> str:
    """Build a PascalCase name from a route template.

    Path variables become "With<Variable>" tokens, every other segment
    is PascalCased, e.g. "/pets/{id}/profile" -> "PetsWithIdProfile".

    Args:
        path: The route template

    Returns:
        The synthesized name, empty if the path has no segments
    """
    parts = []
    for segment in path.split("/"):
        if "{" in segment:
            parts.append("With" + to_pascal_case(segment.strip("{}")))
        else:
            parts.append(to_pascal_case(segment))
    return "".join(parts)
