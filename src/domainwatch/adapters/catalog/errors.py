"""Errors raised while reading provider catalogs."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog loading failures."""


class CatalogValidationError(CatalogError):
    """The catalog document does not match the catalog schema."""


class CatalogFetchError(CatalogError):
    """The catalog could not be read from its source."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source
