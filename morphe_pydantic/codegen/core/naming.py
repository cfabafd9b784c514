"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions, keyword conflicts
and pluralization of navigation members.
"""

import re
from enum import Enum
from typing import Dict, Optional, Set

import inflect

from ...logging_config import get_logger

logger = get_logger(__name__)


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # tax_id
    PASCAL_CASE = "pascal"    # TaxId
    SCREAMING_SNAKE = "screaming_snake"  # TAX_ID


# Python keywords
PYTHON_RESERVED_WORDS = {
    "False", "None", "True", "and", "as", "assert", "async", "await",
    "break", "class", "continue", "def", "del", "elif", "else", "except",
    "finally", "for", "from", "global", "if", "import", "in", "is",
    "lambda", "nonlocal", "not", "or", "pass", "raise", "return", "try",
    "while", "with", "yield",
}

# Attributes a generated BaseModel field must not shadow
PYDANTIC_RESERVED_NAMES = {
    "construct", "copy", "dict", "fields", "json", "model_computed_fields",
    "model_config", "model_construct", "model_copy", "model_dump",
    "model_dump_json", "model_extra", "model_fields", "model_fields_set",
    "model_json_schema", "model_post_init", "model_rebuild",
    "model_validate", "model_validate_json", "parse_obj", "parse_raw",
    "schema", "schema_json", "validate",
}


# Prefix for identifiers that would start with a digit
LEADING_DIGIT_PREFIXES = {
    NamingCase.SNAKE_CASE: "field_",
    NamingCase.SCREAMING_SNAKE: "FIELD_",
    NamingCase.PASCAL_CASE: "Field",
}


def to_snake_case(name: str) -> str:
    """Convert a Morphe name (PascalCase, camelCase, acronyms) to snake_case."""
    name = name.replace("-", "_").replace(" ", "_")

    # HTTPServer -> HTTP_Server, TaxID -> Tax_ID
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

    name = name.lower()
    name = re.sub(r"_+", "_", name)

    return name.strip("_")


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return "".join(part.capitalize() for part in to_snake_case(name).split("_") if part)


_inflect_engine: Optional[inflect.engine] = None


def pluralize(name: str) -> str:
    """Pluralize the last word of a snake_case identifier."""
    global _inflect_engine
    if _inflect_engine is None:
        _inflect_engine = inflect.engine()
        _inflect_engine.classical(persons=True)

    head, _, last = name.rpartition("_")
    if not last:
        return name

    plural = _inflect_engine.plural_noun(last) or f"{last}s"
    return f"{head}_{plural}" if head else plural


class NameSanitizer:
    """Handles name sanitization and case conversion.

    One sanitizer is scoped to a single generated declaration, so the
    duplicate tracking never leaks between definitions.
    """

    def __init__(self, reserved_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Names that must be suffixed when produced
        """
        self.reserved_words = reserved_words or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use as a Python identifier.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved word conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._prefix_leading_digit(self._convert_case(cleaned, target_case), target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
        cleaned = cleaned.strip("_-")

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return to_pascal_case(name)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return to_snake_case(name).upper()
        else:
            return name

    def _prefix_leading_digit(self, name: str, target_case: NamingCase) -> str:
        # Underscore-prefixed attributes are private to pydantic
        if not name[:1].isdigit():
            return name
        prefix = LEADING_DIGIT_PREFIXES.get(target_case, "field_")
        return f"{prefix}{name}"

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words:
            logger.debug("Identifier '%s' is reserved, renamed to '%s%s'", name, name, suffix)
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}_{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()
        self._name_cache.clear()


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer for fields of generated pydantic classes."""
    return NameSanitizer(PYTHON_RESERVED_WORDS | PYDANTIC_RESERVED_NAMES)
