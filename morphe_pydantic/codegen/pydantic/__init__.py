"""
Pydantic content generators, one per Morphe definition kind.
"""

from .base import PydanticClassGenerator
from .entities import EntityGenerator
from .enums import EnumGenerator
from .models import ModelGenerator
from .structures import StructureGenerator

__all__ = [
    "PydanticClassGenerator",
    "ModelGenerator",
    "StructureGenerator",
    "EntityGenerator",
    "EnumGenerator",
]
