"""
Shared rendering for pydantic class generators.

Models, structures and entities all emit annotated class attributes;
this module holds the field-line, configuration-block and lazy-stub
rendering they have in common.
"""

from typing import List, Optional

from ..core.generator import CodeGenerator
from ..core.imports import ImportTracker
from ..core.naming import NameSanitizer, NamingCase, pluralize, to_snake_case
from ..core.relations import CompiledDefinition, ResolvedField
from ..core.schema import DefinitionKind
from ..core.types import LiteralType, TypeExpr, UnionType, optional, references


class PydanticClassGenerator(CodeGenerator):
    """Base for generators that emit annotated class attributes."""

    @property
    def use_field(self) -> bool:
        return False

    def render_field(
        self,
        name: str,
        type_expr: TypeExpr,
        tracker: ImportTracker,
        optional_default: bool = False,
    ) -> str:
        """
        Render one attribute line.

        Args:
            name: Sanitized attribute name
            type_expr: Field type
            tracker: Import tracker of the current module
            optional_default: Wrap in Optional and default to None

        Returns:
            Line without indentation
        """
        if not self.options.add_type_hints:
            return f"{name} = None"

        if optional_default:
            type_expr = optional(type_expr)
        tracker.track(type_expr)
        annotation = type_expr.render()

        if self.use_field:
            tracker.add_runtime("pydantic", "Field")
            default = "Field(default=None)" if optional_default else "Field(...)"
            return f"{name}: {annotation} = {default}"

        if optional_default:
            return f"{name}: {annotation} = None"
        return f"{name}: {annotation}"

    def render_data_fields(self, compiled: CompiledDefinition, sanitizer: NameSanitizer,
                           tracker: ImportTracker) -> List[str]:
        return [
            self.render_field(sanitizer.sanitize_name(f.name, NamingCase.SNAKE_CASE), f.type, tracker)
            for f in compiled.data_fields
        ]

    def render_foreign_keys(self, compiled: CompiledDefinition, sanitizer: NameSanitizer,
                            tracker: ImportTracker) -> List[str]:
        lines = []
        for fk in compiled.foreign_key_fields:
            name = sanitizer.sanitize_name(fk.name, NamingCase.SNAKE_CASE)
            lines.append(self.render_field(name, self.foreign_key_type(compiled, fk), tracker, optional_default=True))
        return lines

    def foreign_key_type(self, compiled: CompiledDefinition, fk: ResolvedField) -> TypeExpr:
        """A polymorphic ``_type`` discriminator narrows to the Union member names."""
        if fk.relation is None or not fk.name.endswith("_type"):
            return fk.type

        nav = compiled.navigation_for(fk.relation.name)
        if nav is not None and isinstance(nav.type, UnionType):
            return LiteralType(tuple(member.name for member in nav.type.members))
        return fk.type

    def navigation_name(self, nav: ResolvedField, sanitizer: NameSanitizer) -> str:
        name = to_snake_case(nav.name)
        if nav.relation is not None and nav.relation.type.is_many:
            name = pluralize(name)
        return sanitizer.sanitize_name(name, NamingCase.SNAKE_CASE)

    def render_lazy_member(self, name: str, type_expr: TypeExpr, tracker: ImportTracker,
                           style: str = "property") -> List[str]:
        """Render a lazy-resolution stub raising NotImplementedError."""
        method_name = name if style == "property" else f"load_{name}"

        if self.options.add_type_hints:
            type_expr = optional(type_expr)
            tracker.track(type_expr)
            signature = f"def {method_name}(self) -> {type_expr.render()}:"
        else:
            signature = f"def {method_name}(self):"

        lines = [""]
        if style == "property":
            lines.append("@property")
        lines.append(signature)
        lines.append(f'{self.indent}raise NotImplementedError("lazy loading of {name} is not implemented")')
        return lines

    def has_enum_field(self, compiled: CompiledDefinition) -> bool:
        return any(
            ref.kind == DefinitionKind.ENUM
            for f in compiled.data_fields
            for ref in references(f.type)
        )

    def enum_config_lines(self) -> List[str]:
        """Configuration block storing enum members by value."""
        if self.options.pydantic_v2:
            return [
                "",
                "model_config = {",
                f'{self.indent}"validate_assignment": True,',
                f'{self.indent}"use_enum_values": True,',
                "}",
            ]
        return [
            "",
            "class Config:",
            f"{self.indent}validate_assignment = True",
            f"{self.indent}use_enum_values = True",
        ]

    def render_pydantic_class(self, compiled: CompiledDefinition, tracker: ImportTracker,
                              members: List[str], config_block: Optional[bool] = None) -> str:
        """Render a ``BaseModel`` subclass around the given members."""
        tracker.add_runtime("pydantic", "BaseModel")
        if config_block is None:
            config_block = self.has_enum_field(compiled)
        if config_block:
            members = members + self.enum_config_lines()

        return self.render_class(
            imports=tracker.render(),
            class_name=compiled.name,
            bases=["BaseModel"],
            body=self.assemble_body(members),
        )
