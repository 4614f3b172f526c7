"""
Tests for the Schema node model and its walker.
"""

import pytest

from openapi_to_ir.pipeline.analyzer.ir_nodes import (
    Parameter,
    PrimitiveType,
    Response,
    Schema,
    Variant,
    WalkControl,
    walk_schema,
)


def make_tree():
    """Struct "Root" with an extension slot, an array of strings and a nested struct."""
    root = Schema(name="Root")
    extra = Schema(field_name="Extra").as_any()
    tags = Schema(field_name="tags").as_array(Schema(name="Tag").as_primitive(PrimitiveType.STRING))
    child = Schema(name="Child").as_struct({"id": Schema(field_name="id").as_primitive(PrimitiveType.INT)})
    root.as_struct({"tags": tags, "child": child})
    root.additional_props = extra
    root.additional_props_name = "Extra"
    return root


def visited_names(paths):
    return [p.last.name or p.last.field_name for p in paths]


def test_top_down_is_preorder_with_extension_first():
    root = make_tree()
    names = visited_names(root.iter_paths())
    assert names == ["Root", "Extra", "tags", "Tag", "Child", "id"]


def test_bottom_up_is_reverse_preorder():
    root = make_tree()
    top_down = visited_names(root.iter_paths())
    bottom_up = visited_names(root.iter_paths(bottom_up=True))
    assert bottom_up == list(reversed(top_down))


def test_every_node_visited_once():
    root = make_tree()
    seen = [id(p.last) for p in root.iter_paths()]
    assert len(seen) == len(set(seen)) == 6


def test_path_carries_ancestors():
    root = make_tree()
    paths = {p.last.name or p.last.field_name: p for p in root.iter_paths()}
    assert paths["Tag"].names() == ["Root", "", "Tag"]
    assert paths["Tag"].first is root
    assert len(paths["Tag"].ancestors) == 2
    assert len(paths["Root"].ancestors) == 0


def test_walk_stop_ends_whole_walk():
    root = make_tree()
    visited = []

    def walker(path):
        visited.append(path.last)
        if path.last.name == "Tag":
            return WalkControl.STOP
        return None

    assert root.walk(walker) is False
    assert len(visited) == 4


def test_walk_missing_schema_is_noop():
    calls = []
    assert walk_schema(None, calls.append) is True
    assert calls == []


def test_map_collapse_clears_extension_slot():
    root = make_tree()
    value = root.additional_props
    root.as_map(Schema().as_primitive(PrimitiveType.STRING), value)

    assert root.variant is Variant.MAP
    assert root.value is value
    assert root.key.primitive_type is PrimitiveType.STRING
    assert root.additional_props is None
    assert root.properties == {}
    assert len(list(root.iter_paths())) == 3


def test_as_compound_rejects_other_variants():
    with pytest.raises(ValueError):
        Schema().as_compound(Variant.STRUCT, [])


def test_can_be_nil_and_null_wrapper():
    assert Schema().as_array(Schema().as_any()).can_be_nil()
    assert Schema().as_any().can_be_nil()
    assert not Schema().as_struct({}).can_be_nil()

    nullable_struct = Schema(nullable=True).as_struct({})
    nullable_map = Schema(nullable=True).as_map(Schema().as_primitive(PrimitiveType.STRING), Schema().as_any())
    assert nullable_struct.needs_null_wrapper()
    assert not nullable_map.needs_null_wrapper()


def test_copy_is_deep():
    root = make_tree()
    clone = root.copy()
    clone.properties["child"].name = "Other"
    assert root.properties["child"].name == "Child"


def test_parameter_and_response_null_wrapper():
    struct = Schema(name="Pet").as_struct({})
    assert Parameter(schema=struct, required=True).needs_null_wrapper()
    assert Parameter(schema=Schema().as_primitive(PrimitiveType.INT)).needs_null_wrapper()
    assert not Parameter(schema=Schema().as_primitive(PrimitiveType.INT), required=True).needs_null_wrapper()
    assert not Parameter(schema=Schema().as_array(struct)).needs_null_wrapper()
    assert not Parameter().needs_null_wrapper()

    assert Response(schema=struct).needs_null_wrapper()
    assert not Response().needs_null_wrapper()


if __name__ == "__main__":
    pytest.main([__file__])
