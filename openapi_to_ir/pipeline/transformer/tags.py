"""
Tag template expansion.

Every schema gets the configured tags (e.g. serialization directives),
rendered with the field name, the type name and the description of the
schema. Tags set on a schema itself replace the configured ones for the
same key.
"""

from __future__ import annotations

import jinja2

from ..analyzer.ir_nodes import Operation, Schema, SchemaPath, SchemaWalker, Spec, WalkControl, walk_schema
from ..errors import TagTemplateError
from .context import RunContext


class TagRenderer:
    """Renders tag templates in the sandboxed environment of a run."""

    def __init__(self, context: RunContext):
        self.context = context

    def _compile(self, source: str) -> jinja2.Template:
        template = self.context.templates.get(source)
        if template is None:
            try:
                template = self.context.environment.from_string(source)
            except jinja2.TemplateSyntaxError as e:
                raise TagTemplateError(f"cannot parse tag template {source!r}: {e}") from e
            self.context.templates[source] = template
        return template

    def render(self, source: str, schema: Schema) -> str:
        """
        Render one tag template for a schema.

        Args:
            source: Template source, e.g. "{{ field_name }}"
            schema: The schema the tag is attached to

        Returns:
            The rendered tag value
        """
        template = self._compile(source)
        try:
            return template.render(
                field_name=schema.field_name or schema.original_name,
                type=schema.name,
                description=schema.description,
            )
        except jinja2.TemplateError as e:
            raise TagTemplateError(f"cannot render tag template {source!r}: {e}", node_name=schema.name) from e


def _tag_walker(tags: dict[str, list[str]], renderer: TagRenderer, ref_names: list[str] | None = None) -> SchemaWalker:
    def add_tags(path: SchemaPath) -> WalkControl | None:
        if not tags:
            return WalkControl.STOP

        node = path.last
        # Rendered values are never templates again
        tagged = renderer.context.tagged
        if id(node) not in tagged:
            tagged.add(id(node))
            merged = {key: list(parts) for key, parts in tags.items()}
            merged.update({key: list(parts) for key, parts in node.tags.items()})
            node.tags = {key: [renderer.render(part, node) for part in parts] for key, parts in merged.items()}

        if node.name and ref_names is not None:
            ref_names.append(node.name)
        return None

    return add_tags


def _apply_to_operation(spec: Spec, op: Operation, tags: dict[str, list[str]], renderer: TagRenderer) -> None:
    roots = [param.schema for param in op.parameters] + [res.schema for res in op.responses]
    for root in roots:
        ref_names: list[str] = []
        walk_schema(root, _tag_walker(tags, renderer, ref_names), bottom_up=True)

        # Extracted types are only referenced by name here, tag them as well
        for name in ref_names:
            for entry in spec.schemas:
                if entry.name == name:
                    entry.walk(_tag_walker(tags, renderer), bottom_up=True)


def apply_tags(spec: Spec, tags: dict[str, list[str]], context: RunContext) -> None:
    """Expand the tag templates on every registry entry and operation schema."""
    renderer = TagRenderer(context)

    for entry in spec.schemas:
        entry.walk(_tag_walker(tags, renderer), bottom_up=True)

    for op in spec.iter_operations():
        _apply_to_operation(spec, op, tags, renderer)
