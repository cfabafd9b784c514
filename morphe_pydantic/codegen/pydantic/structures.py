"""
Structure generator.

Structures are plain data transfer objects without relations, rendered as
a validated ``BaseModel`` or, on request, as a ``@dataclass`` record.
"""

from ..core.relations import CompiledDefinition, ResolvedField
from ..core.schema import DefinitionKind, Structure
from .base import PydanticClassGenerator


class StructureGenerator(PydanticClassGenerator):
    """Generates one module per Morphe structure."""

    @property
    def kind(self) -> DefinitionKind:
        return DefinitionKind.STRUCTURE

    @property
    def label(self) -> str:
        return "data transfer object"

    @property
    def use_dataclass(self) -> bool:
        return self.config.morphe.structures.use_dataclass

    def compile_definition(self, structure: Structure) -> CompiledDefinition:
        fields = [
            ResolvedField(f.name, self.type_mapper.map_field_type(f.type, self.kind, owner=structure.name))
            for f in structure.sorted_fields()
        ]
        return CompiledDefinition(structure, fields)

    def generate_content(self, compiled: CompiledDefinition) -> str:
        tracker = self.new_tracker(compiled.name)
        sanitizer = self.new_sanitizer()

        members = self.render_data_fields(compiled, sanitizer, tracker)

        if not self.use_dataclass:
            return self.render_pydantic_class(compiled, tracker, members)

        tracker.add_runtime("dataclasses", "dataclass")
        return self.render_class(
            imports=tracker.render(),
            class_name=compiled.name,
            decorators=["@dataclass"],
            body=self.assemble_body(members),
        )
