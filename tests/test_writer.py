"""Tests for the output writer."""

import pytest

from morphe_pydantic.codegen.core.schema import DefinitionKind
from morphe_pydantic.codegen.writer import MorpheWriter, WriterError


def test_writes_modules_and_package_init(tmp_path):
    writer = MorpheWriter(tmp_path)
    paths = writer.write_kind(DefinitionKind.MODEL, {"Person": b"# person\n", "ContactInfo": b"# contact\n"})

    assert (tmp_path / "models" / "person.py").read_bytes() == b"# person\n"
    assert (tmp_path / "models" / "contact_info.py").read_bytes() == b"# contact\n"
    assert paths[-1] == tmp_path / "models" / "__init__.py"
    assert (tmp_path / "models" / "__init__.py").read_text() == (
        "from .contact_info import ContactInfo\n"
        "from .person import Person\n"
        "\n"
        "__all__ = [\n"
        '    "ContactInfo",\n'
        '    "Person",\n'
        "]\n"
    )


def test_root_init_imports_written_packages(tmp_path):
    writer = MorpheWriter(tmp_path, indent_size=2)
    writer.write_kind(DefinitionKind.MODEL, {"Person": b""})
    writer.write_kind(DefinitionKind.ENUM, {"Nationality": b""})
    writer.write_kind(DefinitionKind.ENTITY, {})

    writer.write_root_init()

    assert (tmp_path / "__init__.py").read_text() == (
        "from . import enums, models\n"
        "\n"
        "__all__ = [\n"
        '  "enums",\n'
        '  "models",\n'
        "]\n"
    )
    assert not (tmp_path / "entities").exists()


def test_generate_init_disabled(tmp_path):
    writer = MorpheWriter(tmp_path, generate_init=False)
    writer.write_kind(DefinitionKind.STRUCTURE, {"Address": b"# address\n"})

    assert writer.write_root_init() is None
    assert (tmp_path / "structures" / "address.py").exists()
    assert not (tmp_path / "structures" / "__init__.py").exists()
    assert not (tmp_path / "__init__.py").exists()


def test_write_failure_raises(tmp_path):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")

    with pytest.raises(WriterError, match="failed to write"):
        MorpheWriter(blocker).write_kind(DefinitionKind.MODEL, {"Person": b""})
