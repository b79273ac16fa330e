"""Provider catalog documents: schema, translation and loading."""

from __future__ import annotations

from .errors import CatalogError, CatalogFetchError, CatalogValidationError
from .loader import fetch_catalog, load_catalog, load_catalog_file
from .schema import CatalogDocument, ProviderEntryModel
from .translator import parse_catalog, parse_catalog_json, translate_catalog, translate_rule

__all__ = [
    "CatalogDocument",
    "CatalogError",
    "CatalogFetchError",
    "CatalogValidationError",
    "ProviderEntryModel",
    "fetch_catalog",
    "load_catalog",
    "load_catalog_file",
    "parse_catalog",
    "parse_catalog_json",
    "translate_catalog",
    "translate_rule",
]
