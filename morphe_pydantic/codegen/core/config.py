"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files and
dictionaries, providing defaults and validation for generator settings.
Keys may use the plugin's camelCase names or snake_case.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .imports import parse_python_version

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


LAZY_LOADING_STYLES = ("property", "method")


@dataclass
class PydanticConfig:
    """Pydantic-specific output options."""

    pydantic_v2: bool = True
    add_type_hints: bool = True
    generate_init: bool = True
    indent_size: int = 4
    python_version: str = "3.8"

    @property
    def indent(self) -> str:
        return " " * self.indent_size

    @property
    def version_info(self):
        return parse_python_version(self.python_version)


@dataclass
class EnumConfig:
    generate_str_method: bool = False


@dataclass
class ModelConfig:
    use_field: bool = False


@dataclass
class StructureConfig:
    # plain @dataclass record instead of a validated BaseModel
    use_dataclass: bool = False


@dataclass
class EntityConfig:
    lazy_loading_style: str = "property"


@dataclass
class MorpheConfig:
    """Per-kind options."""

    enums: EnumConfig = field(default_factory=EnumConfig)
    models: ModelConfig = field(default_factory=ModelConfig)
    structures: StructureConfig = field(default_factory=StructureConfig)
    entities: EntityConfig = field(default_factory=EntityConfig)


@dataclass
class CompileConfig:
    """Complete configuration of a compilation run."""

    input_path: str = ""
    output_path: str = ""
    verbose: bool = False
    workers: int = 1
    format: PydanticConfig = field(default_factory=PydanticConfig)
    morphe: MorpheConfig = field(default_factory=MorpheConfig)

    def validate(self, require_paths: bool = False) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of problems found (empty when valid)
        """
        problems = []

        if require_paths and not self.input_path:
            problems.append("inputPath is required")
        if require_paths and not self.output_path:
            problems.append("outputPath is required")

        if not isinstance(self.format.indent_size, int) or self.format.indent_size <= 0:
            problems.append(f"Invalid indentSize: {self.format.indent_size}")

        if not re.fullmatch(r"\d+(\.\d+)?", str(self.format.python_version)):
            problems.append(f"Invalid pythonVersion: {self.format.python_version}")

        style = self.morphe.entities.lazy_loading_style
        if style not in LAZY_LOADING_STYLES:
            problems.append(
                f"Invalid entities.lazyLoadingStyle: {style} (expected one of: {', '.join(LAZY_LOADING_STYLES)})"
            )

        if not isinstance(self.workers, int) or self.workers < 1:
            problems.append(f"Invalid workers: {self.workers}")

        return problems

    def ensure_valid(self, require_paths: bool = False) -> "CompileConfig":
        problems = self.validate(require_paths)
        if problems:
            raise ConfigError("; ".join(problems))
        return self


# Plugin key -> dataclass attribute
_FORMAT_KEYS = {
    "pydanticV2": "pydantic_v2",
    "addTypeHints": "add_type_hints",
    "generateInit": "generate_init",
    "indentSize": "indent_size",
    "pythonVersion": "python_version",
}

_SECTION_KEYS = {
    "enums": {"generateStrMethod": "generate_str_method"},
    "models": {"useField": "use_field"},
    "structures": {"useDataclass": "use_dataclass"},
    "entities": {"lazyLoadingStyle": "lazy_loading_style"},
}

_TOP_LEVEL_KEYS = {
    "inputPath": "input_path",
    "outputPath": "output_path",
    "verbose": "verbose",
    "workers": "workers",
}


def _normalize(data: Dict[str, Any], key_map: Dict[str, str], where: str) -> Dict[str, Any]:
    """Translate camelCase keys, keeping snake_case ones; unknown keys are ignored."""
    known = set(key_map.values())
    result = {}
    for key, value in data.items():
        if key in key_map:
            result[key_map[key]] = value
        elif key in known:
            result[key] = value
        else:
            logger.debug("Ignoring unknown %s option: %s", where, key)
    return result


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> CompileConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Configuration overrides (plugin JSON shape)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        merged: Dict[str, Any] = {}

        if config_file:
            self._merge(merged, self._load_config_file(config_file))

        if custom_config:
            if not isinstance(custom_config, dict):
                raise ConfigError(f"Configuration must be a JSON object, got {type(custom_config).__name__}")
            self._merge(merged, custom_config)

        return self._dict_to_config(merged)

    def _merge(self, target: Dict[str, Any], source: Dict[str, Any]):
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                self._merge(target[key], value)
            else:
                target[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> CompileConfig:
        """Convert the plugin JSON shape to a CompileConfig instance."""
        top = _normalize(
            {k: v for k, v in config_dict.items() if k != "config"}, _TOP_LEVEL_KEYS, "top-level"
        )

        options = config_dict.get("config") or {}
        if not isinstance(options, dict):
            raise ConfigError("'config' must be a JSON object")

        sections = {}
        for section, key_map in _SECTION_KEYS.items():
            section_data = options.get(section) or {}
            if not isinstance(section_data, dict):
                raise ConfigError(f"'config.{section}' must be a JSON object")
            sections[section] = _normalize(section_data, key_map, section)

        format_options = _normalize(
            {k: v for k, v in options.items() if k not in _SECTION_KEYS}, _FORMAT_KEYS, "format"
        )

        try:
            morphe = MorpheConfig(
                enums=EnumConfig(**sections["enums"]),
                models=ModelConfig(**sections["models"]),
                structures=StructureConfig(**sections["structures"]),
                entities=EntityConfig(**sections["entities"]),
            )
            return CompileConfig(format=PydanticConfig(**format_options), morphe=morphe, **top)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> CompileConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


EXAMPLE_CONFIG = {
    "inputPath": "./morphe",
    "outputPath": "./generated",
    "verbose": False,
    "config": {
        "pythonVersion": "3.11",
        "pydanticV2": True,
        "addTypeHints": True,
        "generateInit": True,
        "indentSize": 4,
        "models": {"useField": True},
        "enums": {"generateStrMethod": True},
        "structures": {"useDataclass": False},
        "entities": {"lazyLoadingStyle": "property"},
    },
}
