"""Application configuration helpers."""

from __future__ import annotations

from .catalog import DEFAULT_CATALOG_TIMEOUT_SECONDS, CatalogConfig, get_catalog_config
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_CATALOG_TIMEOUT_SECONDS",
    "CatalogConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "StorageConfig",
    "configure_logging",
    "get_catalog_config",
    "get_database_config",
    "get_storage_config",
]
