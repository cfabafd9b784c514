"""Pytest configuration and fixtures."""

import pytest

from morphe_pydantic.codegen.core.config import CompileConfig
from morphe_pydantic.codegen.core.schema import (
    Entity,
    EnumDefinition,
    Model,
    Registry,
    RegistryIndex,
    Relation,
    RelationType,
    Structure,
)
from tests.helpers import make_fields, make_relations


@pytest.fixture
def company():
    return Model(
        name="Company",
        fields=make_fields(ID="AutoIncrement", Name="String", TaxID="String"),
        identifiers={"primary": ("ID",)},
        related=make_relations(Relation("Person", RelationType.HAS_MANY)),
    )


@pytest.fixture
def person():
    return Model(
        name="Person",
        fields=make_fields(ID="AutoIncrement", FirstName="String", LastName="String", Nationality="Nationality"),
        identifiers={"primary": ("ID",), "name": ("FirstName", "LastName")},
        related=make_relations(
            Relation("Company", RelationType.FOR_ONE),
            Relation("ContactInfo", RelationType.HAS_ONE),
        ),
    )


@pytest.fixture
def contact_info():
    return Model(
        name="ContactInfo",
        fields=make_fields(ID="AutoIncrement", Email="String"),
        identifiers={"primary": ("ID",)},
        related=make_relations(Relation("Person", RelationType.FOR_ONE)),
    )


@pytest.fixture
def nationality():
    return EnumDefinition(
        name="Nationality",
        type="String",
        entries={"US": "American", "DE": "German", "FR": "French"},
    )


@pytest.fixture
def address():
    return Structure(
        name="Address",
        fields=make_fields(Street="String", City="String", Zip="String"),
    )


@pytest.fixture
def person_entity():
    return Entity(
        name="PersonEntity",
        fields=make_fields(ID="Person.ID", LastName="Person.LastName", Email="Person.ContactInfo.Email"),
        identifiers={"primary": ("ID",)},
        related=make_relations(Relation("Company", RelationType.FOR_ONE)),
    )


@pytest.fixture
def registry(company, person, contact_info, nationality, address, person_entity):
    """A small registry covering every definition kind."""
    return Registry.from_definitions([company, person, contact_info, nationality, address, person_entity])


@pytest.fixture
def index(registry):
    return RegistryIndex(registry)


@pytest.fixture
def config():
    return CompileConfig()


MORPHE_FILES = {
    "enums/nationality.yml": """
name: Nationality
type: String
entries:
  US: American
  DE: German
""",
    "structures/address.yml": """
name: Address
fields:
  Street:
    type: String
  City:
    type: String
""",
    "models/company.yml": """
name: Company
fields:
  ID:
    type: AutoIncrement
    attributes:
      - mandatory
  Name:
    type: String
  TaxID:
    type: String
identifiers:
  primary: ID
related:
  Person:
    type: HasMany
""",
    "models/person.yaml": """
name: Person
fields:
  ID:
    type: AutoIncrement
  FirstName:
    type: String
  Nationality:
    type: Nationality
identifiers:
  primary: ID
  name:
    - FirstName
related:
  Company:
    type: ForOne
  Employer:
    type: ForOne
    aliased: Company
""",
    "entities/person.yml": """
name: PersonEntity
fields:
  ID:
    type: Person.ID
  CompanyName:
    type: Person.Company.Name
related:
  Company:
    type: ForOne
""",
}


@pytest.fixture
def morphe_dir(tmp_path):
    """A registry directory on disk with one definition of every kind."""
    root = tmp_path / "morphe"
    for relative, content in MORPHE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content.lstrip())
    return root
