"""Utility functions for loading a Morphe registry from disk.

This module reads the YAML definitions of a Morphe registry directory
(``enums/``, ``models/``, ``structures/`` and ``entities/``) into the
immutable schema objects used by the compiler.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .codegen.core.schema import (
    Definition,
    DefinitionKind,
    Entity,
    EnumDefinition,
    Field,
    Model,
    Registry,
    Relation,
    RelationType,
    SchemaError,
    Structure,
)
from .logging_config import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")


class RegistryLoaderError(Exception):
    """Custom exception for registry loading errors."""

    pass


def load_registry(path: Union[str, Path]) -> Registry:
    """Load every definition below a registry directory.

    Args:
        path: Registry root holding one sub-directory per definition kind.
            A missing sub-directory means the kind is empty.

    Returns:
        Registry with all loaded definitions.

    Raises:
        RegistryLoaderError: If the root is missing, a file is invalid, or
            two definitions of the same kind share a name.
    """
    root = Path(path)
    logger.debug(f"Loading Morphe registry from {root}")

    if not root.is_dir():
        raise RegistryLoaderError(f"Registry directory not found: {root}")

    definitions: List[Definition] = []
    for kind in DefinitionKind:
        directory = root / kind.directory
        if not directory.is_dir():
            logger.debug(f"No {kind.directory} directory in {root}")
            continue

        for file_path in sorted(directory.iterdir()):
            if file_path.is_file() and file_path.suffix.lower() in YAML_SUFFIXES:
                definitions.append(load_definition(file_path, kind))

    try:
        registry = Registry.from_definitions(definitions)
    except SchemaError as e:
        raise RegistryLoaderError(f"Invalid registry {root}: {e}") from e

    logger.info(f"Loaded {len(registry)} definition(s) from {root}")
    return registry


def load_yaml_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Load one YAML document that must be a mapping.

    Raises:
        RegistryLoaderError: If the file cannot be read or parsed.
    """
    file_path = Path(file_path)
    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RegistryLoaderError(f"Invalid YAML in file {file_path}: {e}") from e
    except OSError as e:
        raise RegistryLoaderError(f"Error reading file {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise RegistryLoaderError(f"Definition file must contain a mapping: {file_path}")

    return data


def load_definition(file_path: Union[str, Path], kind: DefinitionKind) -> Definition:
    """Load and parse a single definition file."""
    data = load_yaml_file(file_path)
    try:
        return parse_definition(data, kind)
    except SchemaError as e:
        raise RegistryLoaderError(f"Invalid {kind.value} definition in {file_path}: {e}") from e


def parse_definition(data: Dict[str, Any], kind: DefinitionKind) -> Definition:
    """Build a definition of the given kind from its YAML mapping.

    Raises:
        SchemaError: If the mapping is malformed.
    """
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SchemaError("missing 'name'")
    name = name.strip()

    if kind == DefinitionKind.ENUM:
        return EnumDefinition(
            name=name,
            type=str(data.get("type") or "String"),
            entries=dict(_mapping(data, "entries")),
        )

    fields = _parse_fields(data)
    if kind == DefinitionKind.STRUCTURE:
        return Structure(name=name, fields=fields)

    definition_class = Entity if kind == DefinitionKind.ENTITY else Model
    return definition_class(
        name=name,
        fields=fields,
        identifiers=_parse_identifiers(data),
        related=_parse_relations(data),
    )


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SchemaError(f"'{key}' must be a mapping")
    return value


def _string_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise SchemaError(f"{where} must be a string or a list of strings")


def _parse_fields(data: Dict[str, Any]) -> Dict[str, Field]:
    fields = {}
    for field_name, spec in _mapping(data, "fields").items():
        field_name = str(field_name)
        if isinstance(spec, dict):
            fields[field_name] = Field(
                name=field_name,
                type=spec.get("type"),
                attributes=_string_list(spec.get("attributes"), f"field {field_name} attributes"),
            )
        else:
            # shorthand: "Name: String"
            fields[field_name] = Field(name=field_name, type=spec)
    return fields


def _parse_identifiers(data: Dict[str, Any]) -> Dict[str, Tuple[str, ...]]:
    return {
        str(identifier): _string_list(value, f"identifier {identifier}")
        for identifier, value in _mapping(data, "identifiers").items()
    }


def _parse_relations(data: Dict[str, Any]) -> Dict[str, Relation]:
    relations = {}
    for relation_name, spec in _mapping(data, "related").items():
        relation_name = str(relation_name)
        if not isinstance(spec, dict):
            raise SchemaError(f"relation {relation_name} must be a mapping")

        aliased = spec.get("aliased")
        through = spec.get("through")
        relations[relation_name] = Relation(
            name=relation_name,
            type=RelationType.parse(spec.get("type")),
            aliased=str(aliased) if aliased else None,
            for_=_string_list(spec.get("for"), f"relation {relation_name} 'for'"),
            through=str(through) if through else None,
        )
    return relations
