"""Tests for the template engine."""

import pytest

from morphe_pydantic.codegen.core.templates import TemplateEngine, TemplateError


def test_class_template_with_decorators():
    engine = TemplateEngine()
    output = engine.render_template(
        "class.py.j2",
        {
            "imports": "from dataclasses import dataclass",
            "decorators": ["@dataclass"],
            "class_name": "Point",
            "bases": "",
            "indent": "    ",
            "docstring": "Point data transfer object.",
            "body": ["", "x: int", "", "y: int"],
        },
    )

    assert output == (
        "from dataclasses import dataclass\n"
        "\n"
        "\n"
        "@dataclass\n"
        "class Point:\n"
        '    """Point data transfer object."""\n'
        "\n"
        "    x: int\n"
        "\n"
        "    y: int\n"
    )


def test_package_init_uses_snake_case_modules():
    output = TemplateEngine().render_template(
        "package_init.py.j2",
        {"entries": [{"name": "ContactInfo"}, {"name": "Person"}], "indent": "    "},
    )

    assert output == (
        "from .contact_info import ContactInfo\n"
        "from .person import Person\n"
        "\n"
        "__all__ = [\n"
        '    "ContactInfo",\n'
        '    "Person",\n'
        "]\n"
    )


def test_render_errors_are_wrapped():
    with pytest.raises(TemplateError, match="missing.j2"):
        TemplateEngine().render_template("missing.j2", {})
