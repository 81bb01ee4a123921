"""Custom exceptions for the type generator."""

from __future__ import annotations


class TypegenError(Exception):
    """Base exception for type generation errors."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = f"{message}" if not source else f"[{source}] {message}"
        super().__init__(full_message)


class OptionsError(TypegenError):
    """Raised when generator options are missing or malformed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        option: str | None = None,
    ) -> None:
        self.option = option
        if option:
            message = f"Option '{option}': {message}"
        super().__init__(message, source)


class CatalogError(TypegenError):
    """Raised when a catalog query fails."""

    def __init__(self, query: str, cause: Exception) -> None:
        self.query = query
        self.cause = cause
        super().__init__(f"Catalog query failed: {cause}", query)
