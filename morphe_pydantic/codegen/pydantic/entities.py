"""
Entity generator.

Entities render like models, except that their field types may be model
field paths and that every navigation member is a lazy-resolution stub.
"""

from ..core.relations import CompiledDefinition, RelationResolver, ResolvedField, compile_fields
from ..core.schema import DefinitionKind, Entity
from .base import PydanticClassGenerator


class EntityGenerator(PydanticClassGenerator):
    """Generates one pydantic module per Morphe entity."""

    @property
    def kind(self) -> DefinitionKind:
        return DefinitionKind.ENTITY

    @property
    def label(self) -> str:
        return "entity"

    @property
    def lazy_loading_style(self) -> str:
        return self.config.morphe.entities.lazy_loading_style

    def compile_definition(self, entity: Entity) -> CompiledDefinition:
        data_fields = [
            ResolvedField(f.name, self.type_mapper.map_entity_field(f.type))
            for f in entity.sorted_fields()
        ]
        resolver = RelationResolver(self.index, self.kind)
        return CompiledDefinition(entity, compile_fields(data_fields, entity.sorted_relations(), resolver))

    def generate_content(self, compiled: CompiledDefinition) -> str:
        tracker = self.new_tracker(compiled.name)
        sanitizer = self.new_sanitizer()

        members = self.render_data_fields(compiled, sanitizer, tracker)
        members.extend(self.render_foreign_keys(compiled, sanitizer, tracker))

        for nav in compiled.navigation_fields:
            name = self.navigation_name(nav, sanitizer)
            members.extend(self.render_lazy_member(name, nav.type, tracker, self.lazy_loading_style))

        return self.render_pydantic_class(compiled, tracker, members)
