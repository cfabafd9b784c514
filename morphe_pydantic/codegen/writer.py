"""
Output writer for compiled definitions.

Places one module per definition under ``<output>/<kind dir>/`` and, when
enabled, the package ``__init__.py`` files that re-export them.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..logging_config import get_logger
from .core.naming import to_snake_case
from .core.schema import DefinitionKind
from .core.templates import TemplateEngine, TemplateError, get_default_template_engine

logger = get_logger(__name__)


class WriterError(Exception):
    """Exception raised when generated files cannot be written."""

    pass


class MorpheWriter:
    """Writes compiled modules into a Python package tree."""

    def __init__(
        self,
        output_path: Union[str, Path],
        generate_init: bool = True,
        indent_size: int = 4,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.output_path = Path(output_path)
        self.generate_init = generate_init
        self.indent = " " * indent_size
        self.template_engine = template_engine or get_default_template_engine()
        self._written_kinds: List[DefinitionKind] = []

    @property
    def written_kinds(self) -> List[DefinitionKind]:
        """Kinds that produced at least one module, in write order."""
        return list(self._written_kinds)

    def module_path(self, kind: DefinitionKind, name: str) -> Path:
        return self.output_path / kind.directory / f"{to_snake_case(name)}.py"

    def write_kind(self, kind: DefinitionKind, compiled: Dict[str, bytes]) -> List[Path]:
        """
        Write every compiled module of one kind.

        Args:
            kind: Definition kind of the modules
            compiled: Mapping of definition name to module bytes

        Returns:
            Paths written, in sorted name order
        """
        if not compiled:
            logger.debug("No %s definitions to write", kind.value)
            return []

        paths = [self._write_bytes(self.module_path(kind, name), compiled[name]) for name in sorted(compiled)]

        if self.generate_init:
            paths.append(self.write_package_init(kind, compiled))

        if kind not in self._written_kinds:
            self._written_kinds.append(kind)
        logger.info("Wrote %d %s module(s) to %s", len(compiled), kind.value, self.output_path / kind.directory)
        return paths

    def write_package_init(self, kind: DefinitionKind, names: Iterable[str]) -> Path:
        """Write ``<kind dir>/__init__.py`` importing every definition."""
        entries = [{"name": name} for name in sorted(names)]
        content = self._render("package_init.py.j2", {"entries": entries, "indent": self.indent})
        return self._write_bytes(self.output_path / kind.directory / "__init__.py", content.encode("utf-8"))

    def write_root_init(self, kinds: Optional[Iterable[DefinitionKind]] = None) -> Optional[Path]:
        """Write the root ``__init__.py`` importing the kind packages."""
        if not self.generate_init:
            return None

        kinds = list(kinds) if kinds is not None else self._written_kinds
        if not kinds:
            logger.debug("Nothing written, skipping root __init__.py")
            return None

        packages = sorted(kind.directory for kind in kinds)
        content = self._render("root_init.py.j2", {"packages": packages, "indent": self.indent})
        return self._write_bytes(self.output_path / "__init__.py", content.encode("utf-8"))

    def _render(self, template_name: str, context: dict) -> str:
        try:
            return self.template_engine.render_template(template_name, context)
        except TemplateError as e:
            raise WriterError(str(e)) from e

    def _write_bytes(self, path: Path, content: bytes) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise WriterError(f"failed to write {path}: {e}") from e
        logger.debug("Wrote %s", path)
        return path
