"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the built-in templates used for generated modules.
"""

from typing import Any, Dict

from jinja2 import DictLoader, Environment

from .naming import to_snake_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


# One class per module: imports, two blank lines, optional decorators,
# header, docstring, then body lines (already relative to the class indent).
CLASS_TEMPLATE = (
    "{{ imports }}\n"
    "\n"
    "\n"
    "{% for decorator in decorators %}\n"
    "{{ decorator }}\n"
    "{% endfor %}\n"
    "class {{ class_name }}{{ bases }}:\n"
    '{{ indent }}"""{{ docstring }}"""\n'
    "{% for line in body %}\n"
    "{% if line %}\n"
    "{{ indent }}{{ line }}\n"
    "{% else %}\n"
    "\n"
    "{% endif %}\n"
    "{% endfor %}\n"
)

PACKAGE_INIT_TEMPLATE = (
    "{% for entry in entries %}\n"
    "from .{{ entry.name | snake_case }} import {{ entry.name }}\n"
    "{% endfor %}\n"
    "\n"
    "__all__ = [\n"
    "{% for entry in entries %}\n"
    '{{ indent }}"{{ entry.name }}",\n'
    "{% endfor %}\n"
    "]\n"
)

ROOT_INIT_TEMPLATE = (
    "from . import {{ packages | join(', ') }}\n"
    "\n"
    "__all__ = [\n"
    "{% for package in packages %}\n"
    '{{ indent }}"{{ package }}",\n'
    "{% endfor %}\n"
    "]\n"
)

BUILTIN_TEMPLATES = {
    "class.py.j2": CLASS_TEMPLATE,
    "package_init.py.j2": PACKAGE_INIT_TEMPLATE,
    "root_init.py.j2": ROOT_INIT_TEMPLATE,
}


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self):
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # Generated Python must never be HTML-escaped
        self._env = Environment(
            loader=DictLoader(dict(BUILTIN_TEMPLATES)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["snake_case"] = to_snake_case

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e


_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine
