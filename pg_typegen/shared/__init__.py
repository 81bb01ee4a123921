"""Shared utilities for the type generator."""

from .options_loader import (
    DEFAULT_OPTIONS_FILES,
    find_options_file,
    load_options_file,
)
from .naming import (
    to_pascal_case,
    enum_member_name,
    is_identifier,
    quote,
    sanitize_property_name,
)
from .errors import (
    TypegenError,
    OptionsError,
    CatalogError,
)

__all__ = [
    # Options loading
    "DEFAULT_OPTIONS_FILES",
    "find_options_file",
    "load_options_file",
    # Naming utilities
    "to_pascal_case",
    "enum_member_name",
    "is_identifier",
    "quote",
    "sanitize_property_name",
    # Errors
    "TypegenError",
    "OptionsError",
    "CatalogError",
]
