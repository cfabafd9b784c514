"""
Core schema representation for code generation.

Holds the Morphe object model (enums, models, structures, entities and
their relations) as immutable definitions, plus the read-only registry and
the lookup index built once per compilation run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(Exception):
    """Exception raised for malformed schema declarations."""

    pass


class DefinitionKind(Enum):
    """Kinds of Morphe definitions, each generated into its own package."""

    ENUM = "enum"
    MODEL = "model"
    STRUCTURE = "structure"
    ENTITY = "entity"

    @property
    def directory(self) -> str:
        """Name of the output package directory for this kind."""
        return "entities" if self is DefinitionKind.ENTITY else f"{self.value}s"


class RelationType(Enum):
    """The eight Morphe relation kinds: {For,Has} x {One,Many} x {plain,Poly}."""

    FOR_ONE = "ForOne"
    FOR_MANY = "ForMany"
    HAS_ONE = "HasOne"
    HAS_MANY = "HasMany"
    FOR_ONE_POLY = "ForOnePoly"
    FOR_MANY_POLY = "ForManyPoly"
    HAS_ONE_POLY = "HasOnePoly"
    HAS_MANY_POLY = "HasManyPoly"

    @property
    def is_for(self) -> bool:
        return self.value.startswith("For")

    @property
    def is_has(self) -> bool:
        return self.value.startswith("Has")

    @property
    def is_one(self) -> bool:
        return "One" in self.value

    @property
    def is_many(self) -> bool:
        return "Many" in self.value

    @property
    def is_poly(self) -> bool:
        return self.value.endswith("Poly")

    @classmethod
    def parse(cls, value: Union[str, "RelationType"]) -> "RelationType":
        """Parse a relation kind, raising SchemaError for unsupported kinds."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise SchemaError(f"unsupported relation type {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class Field:
    """A single named field of a definition."""

    name: str
    type: str
    attributes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Relation:
    """A relation declaration of a model or entity."""

    name: str
    type: RelationType
    aliased: Optional[str] = None
    for_: Tuple[str, ...] = ()
    through: Optional[str] = None

    @property
    def target_name(self) -> str:
        """Name used for navigation: the alias when present, else the relation name."""
        return self.aliased or self.name


@dataclass(frozen=True)
class Definition:
    """Base class of every named schema unit."""

    name: str

    kind = None

    def sorted_fields(self) -> List[Field]:
        return []

    def sorted_relations(self) -> List[Relation]:
        return []


@dataclass(frozen=True)
class Structure(Definition):
    """A plain data transfer structure."""

    fields: Dict[str, Field] = field(default_factory=dict)

    kind = DefinitionKind.STRUCTURE

    def sorted_fields(self) -> List[Field]:
        return [self.fields[name] for name in sorted(self.fields)]


@dataclass(frozen=True)
class Model(Definition):
    """A persisted model with fields, identifiers and relations."""

    fields: Dict[str, Field] = field(default_factory=dict)
    identifiers: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    related: Dict[str, Relation] = field(default_factory=dict)

    kind = DefinitionKind.MODEL

    def sorted_fields(self) -> List[Field]:
        return [self.fields[name] for name in sorted(self.fields)]

    def sorted_relations(self) -> List[Relation]:
        return [self.related[name] for name in sorted(self.related)]


@dataclass(frozen=True)
class Entity(Model):
    """A domain entity; its field types are usually model field paths."""

    kind = DefinitionKind.ENTITY


@dataclass(frozen=True)
class EnumDefinition(Definition):
    """An enumeration with typed entries."""

    type: str = "String"
    entries: Dict[str, Any] = field(default_factory=dict)

    kind = DefinitionKind.ENUM

    def sorted_entries(self) -> List[Tuple[str, Any]]:
        return [(name, self.entries[name]) for name in sorted(self.entries)]


class Registry:
    """Read-only container of all definitions, grouped by kind."""

    def __init__(
        self,
        models: Optional[Mapping[str, Model]] = None,
        structures: Optional[Mapping[str, Structure]] = None,
        entities: Optional[Mapping[str, Entity]] = None,
        enums: Optional[Mapping[str, EnumDefinition]] = None,
    ):
        self._definitions: Dict[DefinitionKind, Dict[str, Definition]] = {
            DefinitionKind.ENUM: dict(enums or {}),
            DefinitionKind.MODEL: dict(models or {}),
            DefinitionKind.STRUCTURE: dict(structures or {}),
            DefinitionKind.ENTITY: dict(entities or {}),
        }

    @classmethod
    def from_definitions(cls, definitions: Iterable[Definition]) -> "Registry":
        """Build a registry from a flat iterable of definitions."""
        grouped: Dict[DefinitionKind, Dict[str, Definition]] = {kind: {} for kind in DefinitionKind}
        for definition in definitions:
            bucket = grouped[definition.kind]
            if definition.name in bucket:
                raise SchemaError(f"duplicate {definition.kind.value} definition: {definition.name}")
            bucket[definition.name] = definition
        return cls(
            models=grouped[DefinitionKind.MODEL],
            structures=grouped[DefinitionKind.STRUCTURE],
            entities=grouped[DefinitionKind.ENTITY],
            enums=grouped[DefinitionKind.ENUM],
        )

    def definitions(self, kind: DefinitionKind) -> Mapping[str, Definition]:
        return self._definitions[kind]

    def get(self, kind: DefinitionKind, name: str) -> Optional[Definition]:
        return self._definitions[kind].get(name)

    def get_all_models(self) -> Mapping[str, Model]:
        return self._definitions[DefinitionKind.MODEL]

    def get_all_structures(self) -> Mapping[str, Structure]:
        return self._definitions[DefinitionKind.STRUCTURE]

    def get_all_entities(self) -> Mapping[str, Entity]:
        return self._definitions[DefinitionKind.ENTITY]

    def get_all_enums(self) -> Mapping[str, EnumDefinition]:
        return self._definitions[DefinitionKind.ENUM]

    def get_model(self, name: str) -> Optional[Model]:
        return self.get_all_models().get(name)

    def get_structure(self, name: str) -> Optional[Structure]:
        return self.get_all_structures().get(name)

    def get_entity(self, name: str) -> Optional[Entity]:
        return self.get_all_entities().get(name)

    def get_enum(self, name: str) -> Optional[EnumDefinition]:
        return self.get_all_enums().get(name)

    def __len__(self) -> int:
        return sum(len(defs) for defs in self._definitions.values())


# Resolution order after the enum check and the caller's preferred kind
_FALLBACK_KIND_ORDER = (DefinitionKind.STRUCTURE, DefinitionKind.MODEL, DefinitionKind.ENTITY)


class RegistryIndex:
    """Lookup tables derived from a registry, built once per compilation run."""

    def __init__(self, registry: Registry):
        self.registry = registry
        self._kinds_by_name: Dict[str, set] = {}
        self._poly_owners: Dict[str, Dict[DefinitionKind, List[str]]] = {}

        for kind in DefinitionKind:
            for name in registry.definitions(kind):
                self._kinds_by_name.setdefault(name, set()).add(kind)

        for kind in (DefinitionKind.MODEL, DefinitionKind.ENTITY):
            for owner_name, owner in registry.definitions(kind).items():
                for relation in owner.related.values():
                    if relation.type.is_poly:
                        owners = self._poly_owners.setdefault(relation.name, {})
                        owners.setdefault(kind, []).append(owner_name)

        for owners in self._poly_owners.values():
            for names in owners.values():
                names.sort()

    def kinds_of(self, name: str) -> set:
        return set(self._kinds_by_name.get(name, ()))

    def resolve_kind(self, name: str, prefer: Optional[DefinitionKind] = None) -> Optional[DefinitionKind]:
        """Decide which definition a type name refers to.

        Enums win, then the preferred kind, then structure, model, entity.
        """
        kinds = self._kinds_by_name.get(name)
        if not kinds:
            return None
        if DefinitionKind.ENUM in kinds:
            return DefinitionKind.ENUM
        if prefer is not None and prefer in kinds:
            return prefer
        for kind in _FALLBACK_KIND_ORDER:
            if kind in kinds:
                return kind
        return None

    def resolve_relation_target(self, name: str, prefer: DefinitionKind) -> Optional[DefinitionKind]:
        """Resolve a navigation target, which is always a model or an entity."""
        kinds = self._kinds_by_name.get(name, ())
        for kind in (prefer, DefinitionKind.MODEL, DefinitionKind.ENTITY):
            if kind in kinds:
                return kind
        return None

    def resolve_poly_owner(
        self, relation_name: str, prefer: DefinitionKind = DefinitionKind.MODEL
    ) -> Optional[Tuple[str, DefinitionKind]]:
        """Find the definition owning a polymorphic relation with this name."""
        owners = self._poly_owners.get(relation_name)
        if not owners:
            return None
        for kind in (prefer, DefinitionKind.MODEL, DefinitionKind.ENTITY):
            if owners.get(kind):
                return owners[kind][0], kind
        return None
