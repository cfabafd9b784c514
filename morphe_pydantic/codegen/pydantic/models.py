"""
Model generator.

A model becomes a ``BaseModel`` with its data fields, the foreign keys its
relations contribute and one optional navigation attribute per relation.
"""

from ..core.relations import CompiledDefinition, RelationResolver, ResolvedField, compile_fields
from ..core.schema import DefinitionKind, Model
from .base import PydanticClassGenerator


class ModelGenerator(PydanticClassGenerator):
    """Generates one pydantic module per Morphe model."""

    @property
    def kind(self) -> DefinitionKind:
        return DefinitionKind.MODEL

    @property
    def label(self) -> str:
        return "model"

    @property
    def use_field(self) -> bool:
        return self.config.morphe.models.use_field

    def compile_definition(self, model: Model) -> CompiledDefinition:
        data_fields = [
            ResolvedField(f.name, self.type_mapper.map_field_type(f.type, self.kind))
            for f in model.sorted_fields()
        ]
        resolver = RelationResolver(self.index, self.kind)
        return CompiledDefinition(model, compile_fields(data_fields, model.sorted_relations(), resolver))

    def generate_content(self, compiled: CompiledDefinition) -> str:
        tracker = self.new_tracker(compiled.name)
        sanitizer = self.new_sanitizer()

        members = self.render_data_fields(compiled, sanitizer, tracker)
        members.extend(self.render_foreign_keys(compiled, sanitizer, tracker))

        # polymorphic navigation cannot be a plain field next to its discriminator
        lazy = []
        for nav in compiled.navigation_fields:
            name = self.navigation_name(nav, sanitizer)
            if compiled.has_discriminator(nav.relation.name):
                lazy.extend(self.render_lazy_member(name, nav.type, tracker))
            else:
                members.append(self.render_field(name, nav.type, tracker, optional_default=True))

        return self.render_pydantic_class(compiled, tracker, members + lazy)
