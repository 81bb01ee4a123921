"""Naming utilities for code generation."""

from __future__ import annotations

import json
import re
from functools import lru_cache

# Valid bare property names in the generated TypeScript
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("identity_provider")
        'IdentityProvider'
        >>> to_pascal_case("log-messages")
        'LogMessages'
        >>> to_pascal_case("linkedIn")
        'LinkedIn'
    """
    # Handle already camelCase/PascalCase by inserting underscores before caps
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    value = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", value)

    parts = [part for part in re.split(r"[^A-Za-z0-9]+", value) if part]
    return "".join(part.capitalize() for part in parts)


@lru_cache(maxsize=1024)
def enum_member_name(label: str) -> str:
    """Derive an enum member name from a database enum label.

    Dots and dashes are not valid in identifiers, so they become word
    separators before the label is PascalCased.
    """
    return to_pascal_case(re.sub(r"[.-]", "_", label))


def is_identifier(value: str) -> bool:
    return _IDENTIFIER_RE.fullmatch(value) is not None


@lru_cache(maxsize=512)
def quote(value: str) -> str:
    """Quote a string for TypeScript literal embedding. Cached for performance."""
    return json.dumps(value, ensure_ascii=False)


@lru_cache(maxsize=1024)
def sanitize_property_name(value: str) -> str:
    """Sanitize a value for use as a TypeScript property key.

    Names that are not valid identifiers are emitted as quoted keys.
    """
    if is_identifier(value):
        return value
    return quote(value)
