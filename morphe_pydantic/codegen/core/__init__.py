"""
Core code generation components.

Provides the schema model, type mapping, relation resolution, import
tracking and the base generator used by every content generator.
"""

from .config import (
    CompileConfig,
    ConfigError,
    ConfigManager,
    EntityConfig,
    EnumConfig,
    ModelConfig,
    MorpheConfig,
    PydanticConfig,
    StructureConfig,
    load_config,
)
from .generator import CodeGenerator, GeneratorError
from .imports import ImportTracker
from .naming import NameSanitizer, NamingCase, pluralize, to_pascal_case, to_snake_case
from .relations import CompiledDefinition, FieldRole, RelationResolver, ResolvedField
from .schema import (
    Definition,
    DefinitionKind,
    Entity,
    EnumDefinition,
    Field,
    Model,
    Registry,
    RegistryIndex,
    Relation,
    RelationType,
    SchemaError,
    Structure,
)
from .templates import TemplateEngine, TemplateError
from .types import TypeExpr, TypeMapper, TypeMappingError

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    # Schema system
    "Definition",
    "DefinitionKind",
    "Entity",
    "EnumDefinition",
    "Field",
    "Model",
    "Registry",
    "RegistryIndex",
    "Relation",
    "RelationType",
    "SchemaError",
    "Structure",
    # Types and relations
    "TypeExpr",
    "TypeMapper",
    "TypeMappingError",
    "CompiledDefinition",
    "FieldRole",
    "RelationResolver",
    "ResolvedField",
    "ImportTracker",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "pluralize",
    "to_pascal_case",
    "to_snake_case",
    # Configuration system
    "CompileConfig",
    "ConfigError",
    "ConfigManager",
    "EntityConfig",
    "EnumConfig",
    "ModelConfig",
    "MorpheConfig",
    "PydanticConfig",
    "StructureConfig",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
]
