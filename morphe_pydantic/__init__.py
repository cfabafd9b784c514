"""Compile Morphe registries into Pydantic models."""

__version__ = "0.1.0"

from .codegen import CompileConfig, compile_registry, load_config, morphe_to_pydantic
from .utils import RegistryLoaderError, load_registry

__all__ = [
    "__version__",
    "CompileConfig",
    "RegistryLoaderError",
    "compile_registry",
    "load_config",
    "load_registry",
    "morphe_to_pydantic",
]
