"""
Tests for the naming helpers.
"""

import pytest

from openapi_to_ir.utils import path_to_name, strip_runtime_expressions, to_camel_case, to_pascal_case


@pytest.mark.parametrize(
    "text,expected",
    [
        ("first_name", "FirstName"),
        ("actionTemplate", "ActionTemplate"),
        ("pet-store", "PetStore"),
        ("first 3 rows", "First3Rows"),
        ("listPets", "ListPets"),
        ("api.v2", "ApiV2"),
        ("", ""),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


def test_to_camel_case():
    assert to_camel_case("get_pets") == "getPets"
    assert to_camel_case("GetPets") == "getPets"
    assert to_camel_case("") == ""


def test_strip_runtime_expressions():
    assert strip_runtime_expressions("{$request.body#/url}/hook?x={$request.query.x}") == "/hook"
    assert strip_runtime_expressions("/plain/{id}") == "/plain/{id}"


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/pets/{id}/profile", "PetsWithIdProfile"),
        ("/pets", "Pets"),
        ("/stores/{store_id}/orders/{orderId}", "StoresWithStoreIdOrdersWithOrderId"),
        ("/", ""),
    ],
)
def test_path_to_name(path, expected):
    assert path_to_name(path) == expected


if __name__ == "__main__":
    pytest.main([__file__])
