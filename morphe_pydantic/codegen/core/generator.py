"""
Base generator interface for all definition kinds.

Defines the contract every content generator implements: compile a
definition into its resolved field list, then render it into one Python
module.
"""

from abc import ABC, abstractmethod
from typing import List, Mapping, Optional, Sequence

from ...logging_config import get_logger
from .config import CompileConfig, PydanticConfig
from .imports import ImportTracker
from .naming import NameSanitizer, create_python_sanitizer
from .relations import CompiledDefinition
from .schema import Definition, DefinitionKind, Registry, RegistryIndex
from .templates import TemplateEngine, get_default_template_engine
from .types import TypeMapper

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all per-kind generators.

    Generators keep no state between definitions: the import tracker and the
    name sanitizer are created fresh for every definition, so one instance
    may serve several threads.
    """

    def __init__(
        self,
        config: Optional[CompileConfig] = None,
        registry: Optional[Registry] = None,
        index: Optional[RegistryIndex] = None,
    ):
        """Initialize generator with configuration and the read-only registry."""
        self.config = config or CompileConfig()
        if index is None:
            index = RegistryIndex(registry or Registry())
        self.index = index
        self.registry = index.registry
        self.type_mapper = TypeMapper(index)

    @property
    @abstractmethod
    def kind(self) -> DefinitionKind:
        """Definition kind handled by this generator."""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Noun used in the generated docstring (e.g. 'model')."""
        pass

    @property
    def file_extension(self) -> str:
        return ".py"

    @property
    def options(self) -> PydanticConfig:
        return self.config.format

    @property
    def indent(self) -> str:
        return self.options.indent

    @property
    def template_engine(self) -> TemplateEngine:
        return get_default_template_engine()

    @abstractmethod
    def compile_definition(self, definition: Definition) -> CompiledDefinition:
        """
        Resolve a definition into its ordered field list.

        Raises:
            TypeMappingError: If a field type cannot be mapped at all
        """
        pass

    @abstractmethod
    def generate_content(self, compiled: CompiledDefinition) -> str:
        """Render a compiled definition into module source."""
        pass

    def generate(self, definition: Definition) -> bytes:
        """Compile and render one definition into the bytes of its module."""
        compiled = self.compile_definition(definition)
        return self.format_code(self.generate_content(compiled)).encode("utf-8")

    def new_tracker(self, owner_name: str) -> ImportTracker:
        return ImportTracker(
            self.kind,
            owner_name=owner_name,
            indent=self.indent,
            python_version=self.options.version_info,
        )

    def new_sanitizer(self) -> NameSanitizer:
        return create_python_sanitizer()

    def docstring(self, name: str) -> str:
        return f"{name} {self.label}."

    def render_class(
        self,
        imports: str,
        class_name: str,
        body: Sequence[str],
        bases: Sequence[str] = (),
        decorators: Sequence[str] = (),
    ) -> str:
        """Render the class module template."""
        context = {
            "imports": imports,
            "class_name": class_name,
            "bases": f"({', '.join(bases)})" if bases else "",
            "decorators": list(decorators),
            "docstring": self.docstring(class_name),
            "indent": self.indent,
            "body": list(body),
        }
        return self.template_engine.render_template("class.py.j2", context)

    @staticmethod
    def assemble_body(members: List[str]) -> List[str]:
        """Separate members from the docstring, or emit ``pass`` for an empty class."""
        while members and not members[0]:
            members = members[1:]
        if not members:
            return ["pass"]
        return [""] + members

    def validate_definitions(self, definitions: Mapping[str, Definition]) -> List[str]:
        """
        Check definitions for structural issues worth a warning.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        for name in sorted(definitions):
            definition = definitions[name]
            if not definition.sorted_fields() and not definition.sorted_relations():
                if self.kind != DefinitionKind.ENUM:
                    warnings.append(f"{self.kind.value.title()} '{name}' has no fields - will generate empty class")
        return warnings

    def format_code(self, code: str) -> str:
        """
        Strip trailing whitespace and collapse runs of blank lines.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)
