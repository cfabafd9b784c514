"""
Import tracking for generated Python modules.

One tracker is scoped to a single generated declaration. It collects the
imports the emitted fields need and renders them in a fixed order that
never depends on discovery order.
"""

from typing import Dict, Optional, Set, Tuple

from .naming import to_snake_case
from .schema import DefinitionKind
from .types import (
    ArrayType,
    LiteralType,
    MapType,
    OptionalType,
    ReferenceType,
    ScalarType,
    TypeExpr,
    UnionType,
)

# typing names required by each wrapper variant
_WRAPPER_TYPING = {
    OptionalType: "Optional",
    ArrayType: "List",
    MapType: "Dict",
    UnionType: "Union",
    LiteralType: "Literal",
}

_DATETIME_NAMES = {"date", "datetime"}


class ImportTracker:
    """Tracks required imports for one generated module."""

    def __init__(
        self,
        kind: DefinitionKind,
        owner_name: str = "",
        indent: str = "    ",
        python_version: Tuple[int, int] = (3, 8),
    ):
        """
        Args:
            kind: Kind of the definition being generated (decides relative paths)
            owner_name: Name of that definition, never imported into itself
            indent: Indent used for the TYPE_CHECKING block
            python_version: Target version; below 3.8 Literal comes from typing_extensions
        """
        self.kind = kind
        self.owner_name = owner_name
        self.indent = indent
        self.python_version = python_version

        self._runtime: Dict[str, Set[str]] = {}
        self._typing: Set[str] = set()
        self._typing_extensions: Set[str] = set()
        self._datetime: Set[str] = set()
        self._enums: Set[str] = set()
        self._structures: Set[str] = set()
        self._guarded: Dict[str, DefinitionKind] = {}

    def add_runtime(self, module: str, *names: str):
        """Add a runtime import such as ``pydantic.BaseModel``."""
        self._runtime.setdefault(module, set()).update(names)

    def add_typing(self, *names: str):
        """Add typing imports."""
        for name in names:
            if name == "Literal" and self.python_version < (3, 8):
                self._typing_extensions.add(name)
            else:
                self._typing.add(name)

    def track(self, type_expr: TypeExpr):
        """Analyze a field type and record the imports it needs."""
        for node in type_expr.walk():
            typing_name = _WRAPPER_TYPING.get(type(node))
            if typing_name:
                self.add_typing(typing_name)
            elif isinstance(node, ScalarType):
                if node.name == "Any":
                    self.add_typing("Any")
                elif node.name in _DATETIME_NAMES:
                    self._datetime.add(node.name)
            elif isinstance(node, ReferenceType):
                self._track_reference(node)

    def _track_reference(self, ref: ReferenceType):
        if ref.kind is None:
            return
        if ref.kind == self.kind and ref.name == self.owner_name:
            return

        if ref.kind == DefinitionKind.ENUM:
            self._enums.add(ref.name)
        elif ref.kind == DefinitionKind.STRUCTURE:
            self._structures.add(ref.name)
        else:
            self._guarded[ref.name] = ref.kind
            self.add_typing("TYPE_CHECKING")

    def _module_for(self, name: str, kind: DefinitionKind) -> str:
        module = to_snake_case(name)
        if kind == self.kind:
            return f".{module}"
        return f"..{kind.directory}.{module}"

    def render(self) -> str:
        """Render the import section."""
        lines = []

        for module in sorted(self._runtime):
            lines.append(f"from {module} import {', '.join(sorted(self._runtime[module]))}")

        if self._typing:
            lines.append(f"from typing import {', '.join(sorted(self._typing))}")
        if self._typing_extensions:
            lines.append(f"from typing_extensions import {', '.join(sorted(self._typing_extensions))}")

        if self._datetime:
            lines.append(f"from datetime import {', '.join(sorted(self._datetime))}")

        for name in sorted(self._enums):
            lines.append(f"from {self._module_for(name, DefinitionKind.ENUM)} import {name}")

        for name in sorted(self._structures):
            lines.append(f"from {self._module_for(name, DefinitionKind.STRUCTURE)} import {name}")

        if self._guarded:
            lines.append("")
            lines.append("if TYPE_CHECKING:")
            for name in sorted(self._guarded):
                lines.append(f"{self.indent}from {self._module_for(name, self._guarded[name])} import {name}")

        return "\n".join(lines)


def parse_python_version(version: Optional[str]) -> Tuple[int, int]:
    """Parse a ``major.minor`` version tag."""
    if not version:
        return (3, 8)
    parts = str(version).strip().split(".")
    try:
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        raise ValueError(f"invalid Python version tag: {version!r}")
    return (major, minor)
