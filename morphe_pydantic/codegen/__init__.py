"""
Morphe to Pydantic Code Generation Module

Compiles a Morphe registry into one pydantic module per definition.
"""

from .compiler import (
    CompileError,
    compile_all_entities,
    compile_all_enums,
    compile_all_models,
    compile_all_structures,
    compile_kind,
    compile_registry,
    morphe_to_pydantic,
)
from .core.config import CompileConfig, ConfigError, load_config
from .core.generator import CodeGenerator, GeneratorError
from .core.schema import DefinitionKind, Registry, RegistryIndex
from .registry import GeneratorRegistry, RegistryError, get_generator, list_supported_kinds
from .writer import MorpheWriter, WriterError


def compile_definition(definition, registry=None, config=None) -> str:
    """
    Quick compilation of a single definition.

    Args:
        definition: Model, structure, entity or enum definition
        registry: Registry used to resolve references; defaults to one
            holding only this definition
        config: Compilation options

    Returns:
        Generated module source
    """
    if registry is None:
        registry = Registry.from_definitions([definition])
    generator = get_generator(definition.kind, config, registry)
    return generator.generate(definition).decode("utf-8")


__all__ = [
    "CodeGenerator",
    "CompileConfig",
    "CompileError",
    "ConfigError",
    "DefinitionKind",
    "GeneratorError",
    "GeneratorRegistry",
    "MorpheWriter",
    "Registry",
    "RegistryError",
    "RegistryIndex",
    "WriterError",
    "compile_all_entities",
    "compile_all_enums",
    "compile_all_models",
    "compile_all_structures",
    "compile_definition",
    "compile_kind",
    "compile_registry",
    "get_generator",
    "list_supported_kinds",
    "load_config",
    "morphe_to_pydantic",
]
