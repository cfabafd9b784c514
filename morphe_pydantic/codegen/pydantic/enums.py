"""
Enum generator.

A Morphe enum becomes ``class X(str, Enum)`` (``int`` or ``float`` for
numeric enums) with one member per entry, sorted by entry name.
"""

import json
from typing import Any

from ..core.generator import CodeGenerator, GeneratorError
from ..core.naming import NamingCase
from ..core.relations import CompiledDefinition, ResolvedField
from ..core.schema import DefinitionKind, EnumDefinition
from ..core.types import FLOAT, INTEGER, STRING, ScalarType

# Morphe enum type -> mixin base class
ENUM_VALUE_TYPES = {
    "String": STRING,
    "Integer": INTEGER,
    "Float": FLOAT,
}


class EnumGenerator(CodeGenerator):
    """Generates one module per Morphe enum."""

    @property
    def kind(self) -> DefinitionKind:
        return DefinitionKind.ENUM

    @property
    def label(self) -> str:
        return "enum"

    def compile_definition(self, enum: EnumDefinition) -> CompiledDefinition:
        value_type = ENUM_VALUE_TYPES.get(enum.type)
        if value_type is None:
            raise GeneratorError(
                f"unsupported enum type {enum.type!r} (expected one of: {', '.join(ENUM_VALUE_TYPES)})"
            )
        fields = [ResolvedField(name, value_type) for name, _ in enum.sorted_entries()]
        return CompiledDefinition(enum, fields)

    def generate_content(self, compiled: CompiledDefinition) -> str:
        enum = compiled.definition
        tracker = self.new_tracker(compiled.name)
        tracker.add_runtime("enum", "Enum")
        sanitizer = self.new_sanitizer()

        members = []
        for f in compiled.fields:
            member = sanitizer.sanitize_name(f.name, NamingCase.SCREAMING_SNAKE)
            members.append(f"{member} = {self.format_value(enum.entries[f.name], f.type, f.name)}")

        if self.config.morphe.enums.generate_str_method:
            signature = "def __str__(self) -> str:" if self.options.add_type_hints else "def __str__(self):"
            members.extend(["", signature, f"{self.indent}return str(self.value)"])

        mixin = ENUM_VALUE_TYPES[enum.type]
        return self.render_class(
            imports=tracker.render(),
            class_name=compiled.name,
            bases=[mixin.render(), "Enum"],
            body=self.assemble_body(members),
        )

    def format_value(self, value: Any, value_type: ScalarType, entry: str) -> str:
        """Render an entry value as a Python literal of the enum's value type."""
        try:
            if value_type == INTEGER:
                if isinstance(value, bool) or float(value) != int(float(value)):
                    raise ValueError(f"{value!r} is not an integer")
                return str(int(float(value)))
            if value_type == FLOAT:
                if isinstance(value, bool):
                    raise ValueError(f"{value!r} is not a number")
                return repr(float(value))
        except (TypeError, ValueError) as e:
            raise GeneratorError(f"invalid value for entry {entry}: {e}") from e
        return json.dumps(str(value))
