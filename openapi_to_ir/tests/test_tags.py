"""
Tests for tag template expansion.
"""

import pytest

from openapi_to_ir.pipeline.analyzer.ir_nodes import Operation, Parameter, Path, PrimitiveType, Response, Schema, Spec
from openapi_to_ir.pipeline.config import TransformerConfig
from openapi_to_ir.pipeline.errors import TagTemplateError
from openapi_to_ir.pipeline.transformer import RunContext, TagRenderer, apply_tags

DEFAULT_TAGS = TransformerConfig().tags


def pet_schema():
    return Schema(name="Pet", original_name="Pet", description="A pet.").as_struct(
        {
            "pet_id": Schema(field_name="pet_id").as_primitive(PrimitiveType.INT),
            "nick": Schema(field_name="nick", tags={"json": ["nickname"]}).as_primitive(PrimitiveType.STRING),
        }
    )


def test_default_tags_use_field_name():
    spec = Spec(schemas=[pet_schema()])
    apply_tags(spec, DEFAULT_TAGS, RunContext())

    pet = spec.schemas[0]
    assert pet.properties["pet_id"].tags == {"json": ["pet_id", "omitempty"]}
    # Without a field name the source name is used
    assert pet.tags == {"json": ["Pet", "omitempty"]}


def test_node_tags_replace_defaults():
    spec = Spec(schemas=[pet_schema()])
    apply_tags(spec, {"json": ["{{ field_name }}"], "db": ["{{ field_name }}"]}, RunContext())

    nick = spec.schemas[0].properties["nick"]
    assert nick.tags == {"json": ["nickname"], "db": ["nick"]}


def test_type_and_description_variables():
    spec = Spec(schemas=[pet_schema()])
    apply_tags(spec, {"doc": ["{{ type }}: {{ description }}"]}, RunContext())
    assert spec.schemas[0].tags == {"doc": ["Pet: A pet."]}


def test_empty_template_set_stops():
    spec = Spec(schemas=[pet_schema()])
    apply_tags(spec, {}, RunContext())
    assert spec.schemas[0].tags == {}
    assert spec.schemas[0].properties["pet_id"].tags == {}


def test_operation_schemas_and_referenced_entries():
    registry_pet = pet_schema()
    reference = Schema(name="Pet", original_name="Pet")
    op = Operation(
        name="GetPet",
        parameters=[Parameter(name="id", schema=Schema(field_name="id").as_primitive(PrimitiveType.STRING))],
        responses=[Response(name="GetPetResponse200", schema=reference)],
    )
    spec = Spec(schemas=[registry_pet], paths=[Path(name="Pets", operations=[op])])

    apply_tags(spec, DEFAULT_TAGS, RunContext())

    assert op.parameters[0].schema.tags == {"json": ["id", "omitempty"]}
    assert reference.tags == {"json": ["Pet", "omitempty"]}
    assert registry_pet.properties["pet_id"].tags == {"json": ["pet_id", "omitempty"]}


@pytest.mark.parametrize("description", ["Use {{ braces }} literally", "Color {#fff}", "{% raw %}"])
def test_rendered_values_are_not_rendered_again(description):
    registry_pet = Schema(name="Pet", original_name="Pet", description=description).as_struct(
        {"pet_id": Schema(field_name="pet_id", description=description).as_primitive(PrimitiveType.INT)}
    )
    op = Operation(name="GetPet", responses=[Response(name="GetPetResponse200", schema=Schema(name="Pet"))])
    spec = Spec(schemas=[registry_pet], paths=[Path(name="Pets", operations=[op])])

    apply_tags(spec, {"doc": ["{{ description }}"]}, RunContext())

    assert registry_pet.tags == {"doc": [description]}
    assert registry_pet.properties["pet_id"].tags == {"doc": [description]}


def test_templates_are_cached_per_run():
    context = RunContext()
    spec = Spec(schemas=[pet_schema(), pet_schema()])
    apply_tags(spec, DEFAULT_TAGS, context)
    assert set(context.templates) == {"{{ field_name }}", "omitempty", "nickname"}


def test_invalid_template():
    spec = Spec(schemas=[pet_schema()])
    with pytest.raises(TagTemplateError):
        apply_tags(spec, {"json": ["{{ field_name "]}, RunContext())


def test_unknown_variable():
    renderer = TagRenderer(RunContext())
    with pytest.raises(TagTemplateError):
        renderer.render("{{ secret }}", Schema(name="Pet"))


def test_sandbox_blocks_attribute_access():
    renderer = TagRenderer(RunContext())
    with pytest.raises(TagTemplateError):
        renderer.render("{{ field_name.__class__ }}", Schema(field_name="id"))


def test_filters_are_available():
    renderer = TagRenderer(RunContext())
    assert renderer.render("{{ field_name | upper }}", Schema(field_name="id")) == "ID"


if __name__ == "__main__":
    pytest.main([__file__])
