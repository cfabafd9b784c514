"""
Type system for Pydantic code generation.

Type expressions are a small closed set of immutable variants; the
``TypeMapper`` turns Morphe field types into them.
"""

import json
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ...logging_config import get_logger
from .schema import DefinitionKind, Model, RegistryIndex

logger = get_logger(__name__)


class TypeMappingError(Exception):
    """Raised when a declared field type cannot be mapped at all."""

    pass


@dataclass(frozen=True)
class TypeExpr:
    """Base class of every type expression."""

    def render(self) -> str:
        raise NotImplementedError

    def children(self) -> Tuple["TypeExpr", ...]:
        return ()

    def walk(self) -> Iterator["TypeExpr"]:
        """Yield this expression and every nested expression, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ScalarType(TypeExpr):
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class OptionalType(TypeExpr):
    inner: TypeExpr

    def render(self) -> str:
        return f"Optional[{self.inner.render()}]"

    def children(self) -> Tuple[TypeExpr, ...]:
        return (self.inner,)


@dataclass(frozen=True)
class ArrayType(TypeExpr):
    inner: TypeExpr

    def render(self) -> str:
        return f"List[{self.inner.render()}]"

    def children(self) -> Tuple[TypeExpr, ...]:
        return (self.inner,)


@dataclass(frozen=True)
class MapType(TypeExpr):
    key: TypeExpr
    value: TypeExpr

    def render(self) -> str:
        return f"Dict[{self.key.render()}, {self.value.render()}]"

    def children(self) -> Tuple[TypeExpr, ...]:
        return (self.key, self.value)


@dataclass(frozen=True)
class UnionType(TypeExpr):
    members: Tuple[TypeExpr, ...]

    def render(self) -> str:
        return f"Union[{', '.join(member.render() for member in self.members)}]"

    def children(self) -> Tuple[TypeExpr, ...]:
        return self.members


@dataclass(frozen=True)
class LiteralType(TypeExpr):
    values: Tuple[str, ...]

    def render(self) -> str:
        return f"Literal[{', '.join(json.dumps(value) for value in self.values)}]"


@dataclass(frozen=True)
class ReferenceType(TypeExpr):
    """Reference to another generated definition.

    Models and entities are rendered as quoted forward references since
    they are only imported under ``TYPE_CHECKING``. A definition referring
    to itself is quoted too, as its name is unbound inside its own body.
    """

    name: str
    kind: Optional[DefinitionKind] = None
    self_reference: bool = False

    @property
    def is_forward(self) -> bool:
        return self.self_reference or self.kind in (DefinitionKind.MODEL, DefinitionKind.ENTITY, None)

    def render(self) -> str:
        return f"'{self.name}'" if self.is_forward else self.name


STRING = ScalarType("str")
INTEGER = ScalarType("int")
FLOAT = ScalarType("float")
BOOLEAN = ScalarType("bool")
DATETIME = ScalarType("datetime")
DATE = ScalarType("date")
ANY = ScalarType("Any")

# Morphe field types to Python types
MORPHE_TYPE_MAP = {
    "UUID": STRING,
    "AutoIncrement": INTEGER,
    "String": STRING,
    "Integer": INTEGER,
    "Float": FLOAT,
    "Boolean": BOOLEAN,
    "Time": DATETIME,
    "Date": DATE,
    "Protected": STRING,
    "Sealed": STRING,
    "Map": MapType(STRING, ANY),
    "JSON": MapType(STRING, ANY),
}

ARRAY_PREFIX = "[]"


def optional(type_expr: TypeExpr) -> TypeExpr:
    """Wrap in Optional unless it already is."""
    if isinstance(type_expr, OptionalType):
        return type_expr
    return OptionalType(type_expr)


def references(type_expr: TypeExpr) -> Tuple[ReferenceType, ...]:
    """All definition references nested in a type expression."""
    return tuple(node for node in type_expr.walk() if isinstance(node, ReferenceType))


class TypeMapper:
    """Maps Morphe field types to type expressions using the registry index."""

    def __init__(self, index: RegistryIndex, unknown_type: TypeExpr = ANY):
        self.index = index
        self.unknown_type = unknown_type

    def map_field_type(self, type_name, prefer: Optional[DefinitionKind] = None,
                       owner: Optional[str] = None) -> TypeExpr:
        """
        Map a declared field type.

        Args:
            type_name: Morphe type name, ``[]T`` for arrays, or a definition name
            prefer: Kind preferred when the name exists under several kinds
            owner: Name of the definition declaring the field

        Returns:
            Type expression; unknown scalars map to ``Any``

        Raises:
            TypeMappingError: If the type is not a non-empty string
        """
        if not isinstance(type_name, str) or not type_name.strip():
            raise TypeMappingError(f"malformed field type: {type_name!r}")

        type_name = type_name.strip()

        if type_name.startswith(ARRAY_PREFIX):
            return ArrayType(self.map_field_type(type_name[len(ARRAY_PREFIX):], prefer, owner))

        if type_name in MORPHE_TYPE_MAP:
            return MORPHE_TYPE_MAP[type_name]

        kind = self.index.resolve_kind(type_name, prefer)
        if kind is not None:
            return ReferenceType(type_name, kind, self_reference=(type_name == owner and kind == prefer))

        logger.debug("Unknown field type '%s', falling back to %s", type_name, self.unknown_type)
        return self.unknown_type

    def map_entity_field(self, type_name) -> TypeExpr:
        """
        Map an entity field type, following ``Model.Relation.Field`` paths.

        Raises:
            TypeMappingError: If the path cannot be followed
        """
        if not isinstance(type_name, str) or not type_name.strip():
            raise TypeMappingError(f"malformed entity field type: {type_name!r}")

        if "." not in type_name:
            return self.map_field_type(type_name, DefinitionKind.ENTITY)

        model_name, *path, field_name = type_name.strip().split(".")
        model = self._require_model(model_name, type_name)

        for relation_name in path:
            relation = model.related.get(relation_name)
            if relation is None:
                raise TypeMappingError(
                    f"entity field path {type_name!r}: model {model.name} has no relation {relation_name}"
                )
            if relation.type.is_poly:
                raise TypeMappingError(
                    f"entity field path {type_name!r}: cannot traverse polymorphic relation {relation_name}"
                )
            model = self._require_model(relation.target_name, type_name)

        model_field = model.fields.get(field_name)
        if model_field is None:
            raise TypeMappingError(f"entity field path {type_name!r}: model {model.name} has no field {field_name}")

        return self.map_field_type(model_field.type, DefinitionKind.MODEL)

    def _require_model(self, name: str, path: str) -> Model:
        model = self.index.registry.get_model(name)
        if model is None:
            raise TypeMappingError(f"entity field path {path!r}: unknown model {name}")
        return model
