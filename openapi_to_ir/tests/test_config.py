import pytest

from openapi_to_ir.pipeline.config import IRGeneratorConfig, OperationNameStyle


def test_defaults():
    config = IRGeneratorConfig()
    assert config.resolver.extension_name == "x-ir"
    assert config.resolver.additional_properties_name == "AdditionalProperties"
    assert config.transformer.tags == {"json": ["{{ field_name }}", "omitempty"]}
    assert config.transformer.operation_name_style is OperationNameStyle.PASCAL
    assert config.transformer.comments
    assert config.transformer.description_comments


def test_default_tags_are_not_shared():
    first, second = IRGeneratorConfig(), IRGeneratorConfig()
    first.transformer.tags["db"] = ["x"]
    assert "db" not in second.transformer.tags


def test_from_dict_nested():
    config = IRGeneratorConfig.from_dict(
        {
            "resolver": {"extension_name": "x-go"},
            "transformer": {
                "operation_name_style": "camel",
                "tags": {"yaml": ["{{ field_name }}"]},
                "description_comments": False,
            },
        }
    )
    assert config.resolver.extension_name == "x-go"
    assert config.resolver.additional_properties_name == "AdditionalProperties"
    assert config.transformer.operation_name_style is OperationNameStyle.CAMEL
    assert config.transformer.tags == {"yaml": ["{{ field_name }}"]}
    assert not config.transformer.description_comments
    assert config.transformer.comments


def test_from_dict_ignores_unknown_keys():
    config = IRGeneratorConfig.from_dict({"unknown": 1, "resolver": {"nope": True}, "transformer": {"also_nope": 2}})
    assert not hasattr(config.resolver, "nope")
    assert config.to_dict() == IRGeneratorConfig().to_dict()


def test_invalid_operation_name_style():
    with pytest.raises(ValueError):
        IRGeneratorConfig.from_dict({"transformer": {"operation_name_style": "snake"}})


def test_round_trip():
    config = IRGeneratorConfig.from_dict({"transformer": {"operation_name_style": "camel", "comments": False}})
    assert IRGeneratorConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()
    assert config.to_dict()["transformer"]["operation_name_style"] == "camel"


if __name__ == "__main__":
    pytest.main([__file__])
