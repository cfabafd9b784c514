"""
Relationship resolution for models and entities.

Decides, per relation, which foreign-key fields and which navigation field
a definition gains, and assembles the ordered field list a content
generator renders.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ...logging_config import get_logger
from .schema import Definition, DefinitionKind, Relation, RegistryIndex
from .types import ANY, STRING, ArrayType, ReferenceType, TypeExpr, UnionType

logger = get_logger(__name__)


class FieldRole(Enum):
    """What a resolved field stands for in the generated declaration."""

    DATA = "data"
    FOREIGN_KEY = "foreign_key"
    NAVIGATION = "navigation"


@dataclass(frozen=True)
class ResolvedField:
    """A (name, type) pair produced by type mapping or relation resolution."""

    name: str
    type: TypeExpr
    role: FieldRole = FieldRole.DATA
    relation: Optional[Relation] = None

    @property
    def is_navigation(self) -> bool:
        return self.role == FieldRole.NAVIGATION

    @property
    def is_foreign_key(self) -> bool:
        return self.role == FieldRole.FOREIGN_KEY


@dataclass(frozen=True)
class CompiledDefinition:
    """A definition together with its fully ordered resolved fields."""

    definition: Definition
    fields: List[ResolvedField] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def data_fields(self) -> List[ResolvedField]:
        return [f for f in self.fields if f.role == FieldRole.DATA]

    @property
    def foreign_key_fields(self) -> List[ResolvedField]:
        return [f for f in self.fields if f.role == FieldRole.FOREIGN_KEY]

    @property
    def navigation_fields(self) -> List[ResolvedField]:
        return [f for f in self.fields if f.role == FieldRole.NAVIGATION]

    def navigation_for(self, relation_name: str) -> Optional[ResolvedField]:
        for f in self.navigation_fields:
            if f.relation is not None and f.relation.name == relation_name:
                return f
        return None

    def has_discriminator(self, relation_name: str) -> bool:
        """True when the relation produced a polymorphic ``_type`` field."""
        return any(
            f.relation is not None and f.relation.name == relation_name and f.name.endswith("_type")
            for f in self.foreign_key_fields
        )


class RelationResolver:
    """Resolves relation declarations against the registry index."""

    def __init__(self, index: RegistryIndex, kind: DefinitionKind = DefinitionKind.MODEL):
        self.index = index
        self.kind = kind

    def resolve(self, relations: List[Relation]) -> List[ResolvedField]:
        """Foreign-key fields first, then navigation fields, each by relation name."""
        ordered = sorted(relations, key=lambda relation: relation.name)

        resolved = []
        for relation in ordered:
            resolved.extend(self.foreign_key_fields(relation))
        for relation in ordered:
            resolved.append(self.navigation_field(relation))
        return resolved

    def foreign_key_fields(self, relation: Relation) -> List[ResolvedField]:
        """ForOne contributes ``_id``; ForOnePoly contributes ``_type`` and ``_id``."""
        relation_type = relation.type
        if not (relation_type.is_for and relation_type.is_one):
            return []

        fields = []
        if relation_type.is_poly:
            fields.append(ResolvedField(f"{relation.name}_type", STRING, FieldRole.FOREIGN_KEY, relation))
        fields.append(ResolvedField(f"{relation.name}_id", STRING, FieldRole.FOREIGN_KEY, relation))
        return fields

    def navigation_field(self, relation: Relation) -> ResolvedField:
        return ResolvedField(relation.name, self.navigation_type(relation), FieldRole.NAVIGATION, relation)

    def navigation_type(self, relation: Relation) -> TypeExpr:
        if relation.type.is_poly:
            nav_type = self._polymorphic_type(relation)
        else:
            target = relation.target_name
            nav_type = ReferenceType(target, self.index.resolve_relation_target(target, self.kind))
            if nav_type.kind is None:
                logger.debug("Relation target '%s' of '%s' is not in the registry", target, relation.name)

        if relation.type.is_many:
            nav_type = ArrayType(nav_type)
        return nav_type

    def _polymorphic_type(self, relation: Relation) -> TypeExpr:
        if relation.for_:
            members: Dict[str, ReferenceType] = {}
            for target in relation.for_:
                if target not in members:
                    members[target] = ReferenceType(target, self.index.resolve_relation_target(target, self.kind))
            return UnionType(tuple(members.values()))

        if relation.through:
            owner = self.index.resolve_poly_owner(relation.through, self.kind)
            if owner is None:
                logger.debug(
                    "Polymorphic relation '%s' goes through unknown relation '%s', using Any",
                    relation.name,
                    relation.through,
                )
                return ANY
            owner_name, owner_kind = owner
            return ReferenceType(owner_name, owner_kind)

        return ANY


def compile_fields(data_fields: List[ResolvedField], relations: List[Relation],
                   resolver: RelationResolver) -> List[ResolvedField]:
    """Order data fields by name and append the resolved relation fields."""
    ordered = sorted(data_fields, key=lambda f: f.name)
    return ordered + resolver.resolve(relations)
