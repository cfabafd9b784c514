"""Tests for the model generator."""

import pytest

from morphe_pydantic.codegen import compile_definition
from morphe_pydantic.codegen.core.config import CompileConfig, ModelConfig, MorpheConfig, PydanticConfig
from morphe_pydantic.codegen.core.schema import Field, Model, Registry, Relation, RelationType
from morphe_pydantic.codegen.core.types import TypeMappingError
from morphe_pydantic.codegen.pydantic import ModelGenerator

from tests.helpers import make_fields, make_relations


def render(model, registry, config=None):
    return compile_definition(model, registry, config)


def test_company_has_many_persons(company, registry):
    """A HasMany relation becomes a pluralized optional list of forward refs."""
    expected = (
        "from pydantic import BaseModel\n"
        "from typing import List, Optional, TYPE_CHECKING\n"
        "\n"
        "if TYPE_CHECKING:\n"
        "    from .person import Person\n"
        "\n"
        "\n"
        "class Company(BaseModel):\n"
        '    """Company model."""\n'
        "\n"
        "    id: int\n"
        "    name: str\n"
        "    tax_id: str\n"
        "    persons: Optional[List['Person']] = None\n"
    )
    assert render(company, registry) == expected


def test_contact_info_for_one_person(contact_info, registry):
    """A ForOne relation adds an optional foreign key and a navigation field."""
    expected = (
        "from pydantic import BaseModel\n"
        "from typing import Optional, TYPE_CHECKING\n"
        "\n"
        "if TYPE_CHECKING:\n"
        "    from .person import Person\n"
        "\n"
        "\n"
        "class ContactInfo(BaseModel):\n"
        '    """ContactInfo model."""\n'
        "\n"
        "    email: str\n"
        "    id: int\n"
        "    person_id: Optional[str] = None\n"
        "    person: Optional['Person'] = None\n"
    )
    assert render(contact_info, registry) == expected


def test_enum_field_adds_v2_config_block(person, registry):
    output = render(person, registry)

    assert "from ..enums.nationality import Nationality\n" in output
    assert "    nationality: Nationality\n" in output
    assert (
        "    model_config = {\n"
        '        "validate_assignment": True,\n'
        '        "use_enum_values": True,\n'
        "    }\n"
    ) in output
    assert "class Config" not in output


def test_enum_field_adds_v1_config_class(person, registry):
    config = CompileConfig(format=PydanticConfig(pydantic_v2=False))
    output = render(person, registry, config)

    assert (
        "    class Config:\n"
        "        validate_assignment = True\n"
        "        use_enum_values = True\n"
    ) in output
    assert "model_config" not in output


def test_no_config_block_without_enum_fields(company, registry):
    assert "model_config" not in render(company, registry)


def test_person_field_order(person, registry):
    """Data fields, then foreign keys, then navigation, each alphabetical."""
    output = render(person, registry)
    lines = [line.strip() for line in output.splitlines() if line.startswith("    ") and ":" in line]

    assert lines[:7] == [
        "first_name: str",
        "id: int",
        "last_name: str",
        "nationality: Nationality",
        "company_id: Optional[str] = None",
        "company: Optional['Company'] = None",
        "contact_info: Optional['ContactInfo'] = None",
    ]


def test_guarded_imports_are_sorted(person, registry):
    output = render(person, registry)
    assert (
        "if TYPE_CHECKING:\n"
        "    from .company import Company\n"
        "    from .contact_info import ContactInfo\n"
    ) in output


def test_model_without_relations_has_no_navigation():
    model = Model(name="Tag", fields=make_fields(ID="AutoIncrement", Label="String"))
    output = render(model, Registry.from_definitions([model]))

    assert "TYPE_CHECKING" not in output
    assert "Optional" not in output
    assert output.endswith("    id: int\n    label: str\n")


def test_empty_model_emits_pass():
    model = Model(name="Marker")
    output = render(model, Registry.from_definitions([model]))

    assert output == (
        "from pydantic import BaseModel\n"
        "\n"
        "\n"
        "class Marker(BaseModel):\n"
        '    """Marker model."""\n'
        "    pass\n"
    )


def test_for_one_poly_discriminator_and_lazy_property():
    post = Model(name="Post", fields=make_fields(ID="AutoIncrement"))
    article = Model(name="Article", fields=make_fields(ID="AutoIncrement"))
    comment = Model(
        name="Comment",
        fields=make_fields(ID="AutoIncrement", Body="String"),
        related=make_relations(Relation("Commentable", RelationType.FOR_ONE_POLY, for_=("Post", "Article", "Post"))),
    )
    registry = Registry.from_definitions([post, article, comment])
    output = render(comment, registry)

    assert '    commentable_type: Optional[Literal["Post", "Article"]] = None\n' in output
    assert "    commentable_id: Optional[str] = None\n" in output
    assert (
        "    @property\n"
        "    def commentable(self) -> Optional[Union['Post', 'Article']]:\n"
        '        raise NotImplementedError("lazy loading of commentable is not implemented")\n'
    ) in output
    assert "commentable: Optional" not in output
    assert "from typing import Literal, Optional, TYPE_CHECKING, Union\n" in output


def test_has_many_poly_through_owner():
    post = Model(
        name="Post",
        fields=make_fields(ID="AutoIncrement"),
        related=make_relations(Relation("Comment", RelationType.HAS_MANY_POLY, through="Commentable")),
    )
    comment = Model(
        name="Comment",
        fields=make_fields(ID="AutoIncrement"),
        related=make_relations(Relation("Commentable", RelationType.FOR_ONE_POLY, for_=("Post",))),
    )
    registry = Registry.from_definitions([post, comment])

    assert "    comments: Optional[List['Comment']] = None\n" in render(post, registry)


def test_unmatched_through_falls_back_to_any():
    post = Model(
        name="Post",
        fields=make_fields(ID="AutoIncrement"),
        related=make_relations(Relation("Tag", RelationType.HAS_ONE_POLY, through="Taggable")),
    )
    output = render(post, Registry.from_definitions([post]))

    assert "    tag: Optional[Any] = None\n" in output
    assert "from typing import Any, Optional\n" in output


def test_aliased_relation_uses_alias_target(company):
    owner = Model(
        name="Project",
        fields=make_fields(ID="AutoIncrement"),
        related=make_relations(Relation("Owner", RelationType.FOR_ONE, aliased="Company")),
    )
    output = render(owner, Registry.from_definitions([owner, company]))

    assert "    owner_id: Optional[str] = None\n" in output
    assert "    owner: Optional['Company'] = None\n" in output
    assert "    from .company import Company\n" in output


def test_self_reference_is_not_imported():
    node = Model(
        name="Node",
        fields=make_fields(ID="AutoIncrement"),
        related=make_relations(Relation("Node", RelationType.FOR_ONE)),
    )
    output = render(node, Registry.from_definitions([node]))

    assert "    node: Optional['Node'] = None\n" in output
    assert "import Node" not in output
    assert "TYPE_CHECKING" not in output


def test_reserved_field_names_get_suffix():
    model = Model(name="Document", fields=make_fields(Class="String", ModelConfig="String", Schema="String"))
    output = render(model, Registry.from_definitions([model]))

    assert "    class_: str\n" in output
    assert "    model_config_: str\n" in output
    assert "    schema_: str\n" in output


def test_leading_digit_field_stays_public():
    model = Model(name="Account", fields=make_fields(**{"2FA": "Boolean", "3dSecure": "Boolean"}))
    output = render(model, Registry.from_definitions([model]))

    assert "    field_2_fa: bool\n" in output
    assert "    field_3d_secure: bool\n" in output
    assert "    _" not in output


def test_colliding_names_get_numeric_suffix():
    model = Model(name="Thing", fields=make_fields(FooBar="String", foo_bar="Integer"))
    output = render(model, Registry.from_definitions([model]))

    assert "    foo_bar: str\n" in output
    assert "    foo_bar_1: int\n" in output


def test_use_field_renders_field_defaults(contact_info, registry):
    config = CompileConfig(morphe=MorpheConfig(models=ModelConfig(use_field=True)))
    output = render(contact_info, registry, config)

    assert "from pydantic import BaseModel, Field\n" in output
    assert "    email: str = Field(...)\n" in output
    assert "    person_id: Optional[str] = Field(default=None)\n" in output
    assert "    person: Optional['Person'] = Field(default=None)\n" in output


def test_without_type_hints_fields_are_placeholders(contact_info, registry):
    config = CompileConfig(format=PydanticConfig(add_type_hints=False))
    output = render(contact_info, registry, config)

    assert "    email = None\n" in output
    assert "    person_id = None\n" in output
    assert "    person = None\n" in output
    assert "typing" not in output


def test_custom_indent(contact_info, registry):
    config = CompileConfig(format=PydanticConfig(indent_size=2))
    output = render(contact_info, registry, config)

    assert '  """ContactInfo model."""\n' in output
    assert "  email: str\n" in output


def test_datetime_and_map_fields():
    model = Model(name="Event", fields=make_fields(At="Time", On="Date", Payload="JSON", Tags="[]String"))
    output = render(model, Registry.from_definitions([model]))

    assert "from typing import Any, Dict, List\n" in output
    assert "from datetime import date, datetime\n" in output
    assert "    at: datetime\n" in output
    assert "    on: date\n" in output
    assert "    payload: Dict[str, Any]\n" in output
    assert "    tags: List[str]\n" in output


def test_structure_field_imported_directly(address):
    model = Model(name="Office", fields=make_fields(Location="Address"))
    output = render(model, Registry.from_definitions([model, address]))

    assert "from ..structures.address import Address\n" in output
    assert "    location: Address\n" in output


def test_malformed_field_type_raises(registry):
    model = Model(name="Broken", fields={"Value": Field(name="Value", type=None)})
    generator = ModelGenerator(CompileConfig(), registry)

    with pytest.raises(TypeMappingError):
        generator.generate(model)


def test_output_is_idempotent(person, registry):
    generator = ModelGenerator(CompileConfig(), registry)
    assert generator.generate(person) == generator.generate(person)


def test_generated_module_is_valid_python(person, registry):
    compile(render(person, registry), "person.py", "exec")
