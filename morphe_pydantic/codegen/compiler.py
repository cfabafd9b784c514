"""
Compilation orchestrator.

Drives the per-kind generators over a registry and hands the results to
the writer. Each definition is compiled independently, so a kind can be
spread over a thread pool without changing the output.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from ..logging_config import get_logger
from .core.config import CompileConfig
from .core.generator import GeneratorError
from .core.schema import DefinitionKind, Registry, RegistryIndex, SchemaError
from .core.templates import TemplateError
from .core.types import TypeMappingError
from .registry import get_generator
from .writer import MorpheWriter

logger = get_logger(__name__)

# Enums and structures first: models and entities import them
COMPILE_ORDER = (
    DefinitionKind.ENUM,
    DefinitionKind.STRUCTURE,
    DefinitionKind.MODEL,
    DefinitionKind.ENTITY,
)


class CompileError(Exception):
    """Raised when a definition fails to compile."""

    pass


def compile_kind(
    kind: DefinitionKind,
    config: Optional[CompileConfig] = None,
    registry: Optional[Registry] = None,
    index: Optional[RegistryIndex] = None,
    workers: Optional[int] = None,
) -> Dict[str, bytes]:
    """
    Compile every definition of one kind.

    Args:
        kind: Definition kind to compile
        config: Compilation options
        registry: Registry holding the definitions
        index: Prebuilt index of the registry, shared across kinds
        workers: Thread count; defaults to ``config.workers``

    Returns:
        Mapping of definition name to module bytes, in sorted name order

    Raises:
        CompileError: On the first definition that fails, in name order
    """
    config = config or CompileConfig()
    if index is None:
        index = RegistryIndex(registry or Registry())
    registry = index.registry
    workers = workers or config.workers

    generator = get_generator(kind, config, registry, index)
    definitions = registry.definitions(kind)
    names = sorted(definitions)

    for warning in generator.validate_definitions(definitions):
        logger.info(warning)

    def compile_one(name: str):
        logger.debug("Compiling %s %s", kind.value, name)
        try:
            return name, generator.generate(definitions[name])
        except (TypeMappingError, GeneratorError, SchemaError, TemplateError) as e:
            raise CompileError(f"failed to compile {kind.value} {name}: {e}") from e

    if workers > 1 and len(names) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = dict(executor.map(compile_one, names))
    else:
        results = dict(map(compile_one, names))

    return {name: results[name] for name in names}


def compile_registry(
    config: Optional[CompileConfig] = None,
    registry: Optional[Registry] = None,
    workers: Optional[int] = None,
) -> Dict[DefinitionKind, Dict[str, bytes]]:
    """Compile all four kinds against one shared index."""
    index = RegistryIndex(registry or Registry())
    return {kind: compile_kind(kind, config, index=index, workers=workers) for kind in COMPILE_ORDER}


def _compile_and_write(kind: DefinitionKind, config: CompileConfig, registry: Registry,
                       writer: MorpheWriter, index: Optional[RegistryIndex] = None) -> Dict[str, bytes]:
    compiled = compile_kind(kind, config, registry, index)
    writer.write_kind(kind, compiled)
    return compiled


def compile_all_enums(config: CompileConfig, registry: Registry, writer: MorpheWriter,
                      index: Optional[RegistryIndex] = None) -> Dict[str, bytes]:
    return _compile_and_write(DefinitionKind.ENUM, config, registry, writer, index)


def compile_all_structures(config: CompileConfig, registry: Registry, writer: MorpheWriter,
                           index: Optional[RegistryIndex] = None) -> Dict[str, bytes]:
    return _compile_and_write(DefinitionKind.STRUCTURE, config, registry, writer, index)


def compile_all_models(config: CompileConfig, registry: Registry, writer: MorpheWriter,
                       index: Optional[RegistryIndex] = None) -> Dict[str, bytes]:
    return _compile_and_write(DefinitionKind.MODEL, config, registry, writer, index)


def compile_all_entities(config: CompileConfig, registry: Registry, writer: MorpheWriter,
                         index: Optional[RegistryIndex] = None) -> Dict[str, bytes]:
    return _compile_and_write(DefinitionKind.ENTITY, config, registry, writer, index)


def morphe_to_pydantic(config: CompileConfig) -> Dict[DefinitionKind, Dict[str, bytes]]:
    """
    Run the whole pipeline: load, compile every kind, write.

    Raises:
        ConfigError: If paths are missing or options are unusable
        RegistryLoaderError: If the registry cannot be loaded
        CompileError: If a definition fails to compile
        WriterError: If output cannot be written
    """
    from ..utils import load_registry

    config.ensure_valid(require_paths=True)

    logger.info("Loading Morphe registry from %s", config.input_path)
    registry = load_registry(config.input_path)
    index = RegistryIndex(registry)
    logger.info("Loaded %d definition(s)", len(registry))

    writer = MorpheWriter(config.output_path, config.format.generate_init, config.format.indent_size)

    results = {
        DefinitionKind.ENUM: compile_all_enums(config, registry, writer, index),
        DefinitionKind.STRUCTURE: compile_all_structures(config, registry, writer, index),
        DefinitionKind.MODEL: compile_all_models(config, registry, writer, index),
        DefinitionKind.ENTITY: compile_all_entities(config, registry, writer, index),
    }

    writer.write_root_init()
    return results
