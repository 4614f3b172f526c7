"""
Configuration for the IR pipeline.

Resolver options control how raw schemas are read, transformer options
control the normalization passes run on the resolved document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OperationNameStyle(str, Enum):
    """Casing applied to synthesized operation names."""

    PASCAL = "pascal"  # GetPetsWithIdProfile
    CAMEL = "camel"  # getPetsWithIdProfile


def _default_tags() -> dict[str, list[str]]:
    return {"json": ["{{ field_name }}", "omitempty"]}


@dataclass
class ResolverConfig:
    """Configuration for raw schema resolution.

    Attributes:
        extension_name: Metadata key holding per-node overrides
        additional_properties_name: Field name reserved for the open-ended extension slot
    """

    extension_name: str = "x-ir"
    additional_properties_name: str = "AdditionalProperties"


@dataclass
class TransformerConfig:
    """Configuration for the normalization passes."""

    # Metadata key -> ordered tag templates (Jinja2, sandboxed)
    tags: dict[str, list[str]] = field(default_factory=_default_tags)

    # Casing of synthesized operation names
    operation_name_style: OperationNameStyle = OperationNameStyle.PASCAL

    # Add generated comments to operations
    comments: bool = True

    # Include descriptions from the document in generated comments
    description_comments: bool = True


@dataclass
class IRGeneratorConfig:
    """Configuration options for IR generation."""

    resolver: ResolverConfig = field(default_factory=ResolverConfig)

    transformer: TransformerConfig = field(default_factory=TransformerConfig)

    @staticmethod
    def from_dict(d: dict) -> IRGeneratorConfig:
        """Create a config from a dictionary."""
        config = IRGeneratorConfig()
        for k, v in d.items():
            if k == "resolver" and isinstance(v, dict):
                for rk, rv in v.items():
                    if hasattr(config.resolver, rk):
                        setattr(config.resolver, rk, rv)
            elif k == "transformer" and isinstance(v, dict):
                for tk, tv in v.items():
                    if tk == "operation_name_style" and isinstance(tv, str):
                        tv = OperationNameStyle(tv)
                    elif tk == "tags" and isinstance(tv, dict):
                        tv = {key: list(values) for key, values in tv.items()}
                    if hasattr(config.transformer, tk):
                        setattr(config.transformer, tk, tv)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "resolver": {
                "extension_name": self.resolver.extension_name,
                "additional_properties_name": self.resolver.additional_properties_name,
            },
            "transformer": {
                "tags": {k: list(v) for k, v in self.transformer.tags.items()},
                "operation_name_style": self.transformer.operation_name_style.value,
                "comments": self.transformer.comments,
                "description_comments": self.transformer.description_comments,
            },
        }
