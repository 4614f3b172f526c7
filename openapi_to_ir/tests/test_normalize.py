"""
Tests for inline simplification, resource ordering and operation comments.
"""

import pytest

from openapi_to_ir.pipeline.analyzer.ir_nodes import (
    Operation,
    Parameter,
    ParameterLocation,
    Path,
    PrimitiveType,
    Response,
    Schema,
    Spec,
    Variant,
)
from openapi_to_ir.pipeline.config import TransformerConfig
from openapi_to_ir.pipeline.transformer import add_path_comments, order_resources, simplify_inline_schemas


def string_schema(**kwargs):
    return Schema(**kwargs).as_primitive(PrimitiveType.STRING)


class TestSimplify:
    def test_anonymous_struct_with_extension_becomes_map(self):
        inline = Schema().as_struct({"a": string_schema(field_name="a")})
        inline.additional_props = string_schema()
        inline.additional_props_name = "AdditionalProperties"
        owner = Schema(name="Owner").as_struct({"inline": inline})
        spec = Spec(schemas=[owner])

        simplify_inline_schemas(spec)

        assert inline.variant is Variant.MAP
        assert inline.key.primitive_type is PrimitiveType.STRING
        assert inline.value.primitive_type is PrimitiveType.STRING
        assert inline.additional_props is None
        assert inline.properties == {}

    def test_named_struct_keeps_extension(self):
        named = Schema(name="Named").as_struct({"a": string_schema()})
        named.additional_props = string_schema()
        spec = Spec(schemas=[named])

        simplify_inline_schemas(spec)

        assert named.variant is Variant.STRUCT
        assert named.additional_props is not None

    def test_anonymous_alternatives_become_any(self):
        one_of = Schema().as_compound(Variant.ONE_OF, [string_schema(), Schema().as_struct({})])
        any_of = Schema().as_compound(Variant.ANY_OF, [string_schema()])
        named = Schema(name="Choice").as_compound(Variant.ONE_OF, [string_schema()])
        op = Operation(
            name="Op",
            parameters=[Parameter(name="p", schema=one_of)],
            responses=[Response(name="R", schema=any_of)],
        )
        spec = Spec(schemas=[named], paths=[Path(name="P", operations=[op])])

        simplify_inline_schemas(spec)

        assert one_of.variant is Variant.ANY
        assert one_of.children == []
        assert any_of.variant is Variant.ANY
        assert named.variant is Variant.ONE_OF


def make_unordered_spec():
    cb_ops = [Operation(name="OnB"), Operation(name="OnA", parameters=[Parameter(name="z"), Parameter(name="y")])]
    op_b = Operation(
        name="B",
        parameters=[
            Parameter(name="q", location=ParameterLocation.QUERY),
            Parameter(name="id", location=ParameterLocation.PATH),
            Parameter(name="q", location=ParameterLocation.HEADER),
        ],
        responses=[Response(name="BResponse404"), Response(name="BResponse200")],
        callbacks={
            "Zeta": [Path(name="ZetaPath", operations=list(cb_ops))],
            "Alpha": [Path(name="AlphaTwo"), Path(name="AlphaOne")],
        },
    )
    op_a = Operation(name="A")
    return Spec(
        schemas=[Schema(name="Zebra"), Schema(name="Ant")],
        paths=[Path(name="Second", operations=[op_b, op_a]), Path(name="First")],
    )


def ordering_signature(spec):
    out = []
    for path in spec.paths:
        out.append(path.name)
        for op in path.operations:
            out.append(op.name)
            out.extend((p.name, p.location.value) for p in op.parameters)
            out.extend(r.name for r in op.responses)
            for event, cb_paths in op.callbacks.items():
                out.append(event)
                for cb_path in cb_paths:
                    out.append(cb_path.name)
                    for cb_op in cb_path.operations:
                        out.append(cb_op.name)
                        out.extend(p.name for p in cb_op.parameters)
    return out


class TestOrdering:
    def test_everything_sorted_by_name(self):
        spec = make_unordered_spec()
        order_resources(spec)

        assert [p.name for p in spec.paths] == ["First", "Second"]
        second = spec.paths[1]
        assert [o.name for o in second.operations] == ["A", "B"]
        op_b = second.operations[1]
        assert [r.name for r in op_b.responses] == ["BResponse200", "BResponse404"]
        assert list(op_b.callbacks) == ["Alpha", "Zeta"]
        assert [p.name for p in op_b.callbacks["Alpha"]] == ["AlphaOne", "AlphaTwo"]
        cb_ops = op_b.callbacks["Zeta"][0].operations
        assert [o.name for o in cb_ops] == ["OnA", "OnB"]
        assert [p.name for p in cb_ops[0].parameters] == ["y", "z"]

    def test_sort_is_stable(self):
        spec = make_unordered_spec()
        order_resources(spec)
        params = spec.paths[1].operations[1].parameters
        assert [(p.name, p.location) for p in params] == [
            ("id", ParameterLocation.PATH),
            ("q", ParameterLocation.QUERY),
            ("q", ParameterLocation.HEADER),
        ]

    def test_registry_order_is_kept(self):
        spec = make_unordered_spec()
        order_resources(spec)
        assert [s.name for s in spec.schemas] == ["Zebra", "Ant"]

    def test_same_input_same_order(self):
        first, second = make_unordered_spec(), make_unordered_spec()
        order_resources(first)
        order_resources(second)
        assert ordering_signature(first) == ordering_signature(second)


class TestComments:
    def make_spec(self):
        op = Operation(
            method="GET",
            name="GetPetsWithId",
            description="Get a pet.\n",
            parameters=[Parameter(name="id", location=ParameterLocation.PATH, description="Pet id")],
            responses=[
                Response(name="GetPetsWithIdResponse200", code="200", content_type="application/json", schema=Schema(name="Pet")),
                Response(name="GetPetsWithIdResponseDefault", code="default"),
            ],
        )
        return Spec(paths=[Path(path_string="/pets/{id}", name="PetsWithId", operations=[op])])

    def test_comments(self):
        spec = self.make_spec()
        add_path_comments(spec, TransformerConfig())
        assert spec.paths[0].operations[0].comments == [
            'GetPetsWithId is the "GET" operation for path "/pets/{id}".',
            "",
            "Description: Get a pet.",
            "",
            "Parameters:",
            '    "id" in path.',
            "    Description: Pet id.",
            "Responses:",
            '    "Pet" (200): with content-type application/json.',
            '    "GetPetsWithIdResponseDefault" (default).',
        ]

    def test_without_descriptions(self):
        spec = self.make_spec()
        add_path_comments(spec, TransformerConfig(description_comments=False))
        comments = spec.paths[0].operations[0].comments
        assert not any(c.strip().startswith("Description") for c in comments)

    def test_disabled(self):
        spec = self.make_spec()
        add_path_comments(spec, TransformerConfig(comments=False))
        assert spec.paths[0].operations[0].comments == []


if __name__ == "__main__":
    pytest.main([__file__])
