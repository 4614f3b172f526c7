"""
Per-run state shared by the transformer passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import jinja2
from jinja2.sandbox import SandboxedEnvironment


def _tag_environment() -> SandboxedEnvironment:
    # Unknown variables are errors, tag templates only see three values
    return SandboxedEnvironment(undefined=jinja2.StrictUndefined, autoescape=False)


@dataclass
class RunContext:
    """State owned by a single transformation run."""

    # Counter for names of unnamed all-of fragments
    fragment_count: int = 0

    environment: SandboxedEnvironment = field(default_factory=_tag_environment)

    # Template source -> compiled template
    templates: dict[str, jinja2.Template] = field(default_factory=dict)

    # id() of every schema whose tags were rendered in this run
    tagged: set[int] = field(default_factory=set)

    def next_fragment_name(self) -> str:
        name = f"UnnamedFragment{self.fragment_count}"
        self.fragment_count += 1
        return name
