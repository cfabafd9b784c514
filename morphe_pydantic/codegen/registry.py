"""
Generator registry system for managing the per-kind content generators.

Provides registration and instantiation of the generator handling each
definition kind.
"""

from typing import Dict, List, Optional, Type

from ..logging_config import get_logger
from .core.config import CompileConfig
from .core.generator import CodeGenerator
from .core.schema import DefinitionKind, Registry, RegistryIndex

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry mapping definition kinds to generator classes."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[DefinitionKind, Type[CodeGenerator]] = {}

    def register(self, kind: DefinitionKind, generator_class: Type[CodeGenerator], replace: bool = False):
        """
        Register a generator for a definition kind.

        Args:
            kind: Definition kind handled by the generator
            generator_class: Generator class implementing CodeGenerator
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid
        """
        if not isinstance(generator_class, type) or not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        kind = self._coerce_kind(kind)
        if kind in self._generators and not replace:
            return

        self._generators[kind] = generator_class
        logger.debug("Registered %s for %s definitions", generator_class.__name__, kind.value)

    def unregister(self, kind: DefinitionKind):
        self._generators.pop(self._coerce_kind(kind), None)

    def get_generator_class(self, kind: DefinitionKind) -> Type[CodeGenerator]:
        """
        Get generator class for a kind.

        Raises:
            RegistryError: If no generator is registered
        """
        kind = self._coerce_kind(kind)
        if kind in self._generators:
            return self._generators[kind]

        available = ", ".join(k.value for k in self.list_kinds())
        raise RegistryError(f"No generator registered for kind: {kind.value}. Available: {available}")

    def create_generator(
        self,
        kind: DefinitionKind,
        config: Optional[CompileConfig] = None,
        registry: Optional[Registry] = None,
        index: Optional[RegistryIndex] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for a kind.

        Raises:
            RegistryError: If generator creation fails
        """
        generator_class = self.get_generator_class(kind)
        try:
            return generator_class(config, registry, index)
        except Exception as e:
            raise RegistryError(f"Failed to create {self._coerce_kind(kind).value} generator: {e}") from e

    def list_kinds(self) -> List[DefinitionKind]:
        return [kind for kind in DefinitionKind if kind in self._generators]

    def is_supported(self, kind: DefinitionKind) -> bool:
        return self._coerce_kind(kind) in self._generators

    @staticmethod
    def _coerce_kind(kind) -> DefinitionKind:
        if isinstance(kind, DefinitionKind):
            return kind
        name = str(kind).lower()
        for member in DefinitionKind:
            if name in (member.value, member.directory):
                return member
        raise RegistryError(f"Unknown definition kind: {kind}")


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in pydantic generators."""
    from .pydantic import EntityGenerator, EnumGenerator, ModelGenerator, StructureGenerator

    registry.register(DefinitionKind.ENUM, EnumGenerator)
    registry.register(DefinitionKind.MODEL, ModelGenerator)
    registry.register(DefinitionKind.STRUCTURE, StructureGenerator)
    registry.register(DefinitionKind.ENTITY, EntityGenerator)


def get_generator(
    kind: DefinitionKind,
    config: Optional[CompileConfig] = None,
    registry: Optional[Registry] = None,
    index: Optional[RegistryIndex] = None,
) -> CodeGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(kind, config, registry, index)


def list_supported_kinds() -> List[DefinitionKind]:
    return get_registry().list_kinds()
