"""Tests for configuration loading and validation."""

import json

import pytest

from morphe_pydantic.codegen.core.config import EXAMPLE_CONFIG, CompileConfig, ConfigError, load_config


def test_defaults():
    config = load_config()

    assert config.input_path == ""
    assert config.workers == 1
    assert config.format.pydantic_v2 is True
    assert config.format.add_type_hints is True
    assert config.format.generate_init is True
    assert config.format.indent_size == 4
    assert config.format.python_version == "3.8"
    assert config.morphe.enums.generate_str_method is False
    assert config.morphe.models.use_field is False
    assert config.morphe.structures.use_dataclass is False
    assert config.morphe.entities.lazy_loading_style == "property"
    assert config.validate() == []


def test_plugin_camel_case_keys():
    config = load_config(custom_config=EXAMPLE_CONFIG)

    assert config.input_path == "./morphe"
    assert config.output_path == "./generated"
    assert config.format.python_version == "3.11"
    assert config.format.version_info == (3, 11)
    assert config.morphe.models.use_field is True
    assert config.morphe.enums.generate_str_method is True


def test_snake_case_keys_and_unknown_keys():
    config = load_config(
        custom_config={
            "input_path": "in",
            "unknown": 1,
            "config": {"indent_size": 2, "entities": {"lazy_loading_style": "method", "extra": True}},
        }
    )

    assert config.input_path == "in"
    assert config.format.indent == "  "
    assert config.morphe.entities.lazy_loading_style == "method"


def test_file_then_overrides(tmp_path):
    config_file = tmp_path / "morphe.json"
    config_file.write_text(json.dumps({"inputPath": "a", "outputPath": "b", "config": {"indentSize": 2}}))

    config = load_config(custom_config={"outputPath": "c", "config": {"pydanticV2": False}}, config_file=config_file)

    assert config.input_path == "a"
    assert config.output_path == "c"
    assert config.format.indent_size == 2
    assert config.format.pydantic_v2 is False


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_file=tmp_path / "missing.json")


def test_invalid_json_file(tmp_path):
    config_file = tmp_path / "bad.json"
    config_file.write_text("{not json")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(config_file=config_file)


def test_section_must_be_object():
    with pytest.raises(ConfigError):
        load_config(custom_config={"config": {"models": "yes"}})


@pytest.mark.parametrize(
    "options, problem",
    [
        ({"indentSize": 0}, "indentSize"),
        ({"pythonVersion": "three"}, "pythonVersion"),
        ({"entities": {"lazyLoadingStyle": "eager"}}, "lazyLoadingStyle"),
    ],
)
def test_validation_problems(options, problem):
    config = load_config(custom_config={"config": options})

    problems = config.validate()
    assert any(problem in p for p in problems)
    with pytest.raises(ConfigError):
        config.ensure_valid()


def test_paths_required_for_full_pipeline():
    problems = CompileConfig().validate(require_paths=True)
    assert problems == ["inputPath is required", "outputPath is required"]
