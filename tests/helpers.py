"""Builders shared by the test modules."""

from morphe_pydantic.codegen.core.schema import Field


def make_fields(**types):
    return {name: Field(name=name, type=type_name) for name, type_name in types.items()}


def make_relations(*relations):
    return {relation.name: relation for relation in relations}
