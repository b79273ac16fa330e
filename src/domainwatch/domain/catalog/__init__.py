"""Canonical provider catalog."""

from __future__ import annotations

from .default import DEFAULT_CATALOG, get_default_catalog
from .definitions import (
    CATEGORY_ORDER,
    CatalogDefinition,
    ProviderCatalog,
    build_catalog,
    definitions_from_catalog,
)
from .slugs import slugify

__all__ = [
    "CATEGORY_ORDER",
    "DEFAULT_CATALOG",
    "CatalogDefinition",
    "ProviderCatalog",
    "build_catalog",
    "definitions_from_catalog",
    "get_default_catalog",
    "slugify",
]
