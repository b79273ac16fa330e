"""SQLAlchemy adapter package for domainwatch."""

from __future__ import annotations

from .mappings import mapper_registry, provider_table, start_mappers
from .repositories import SqlAlchemyProviderRepository, SqlAlchemyReferenceRepository
from .store import SqlAlchemyProviderStore
from .unit_of_work import (
    SqlAlchemyProviderUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyProviderRepository",
    "SqlAlchemyProviderStore",
    "SqlAlchemyProviderUnitOfWork",
    "SqlAlchemyReferenceRepository",
    "StartupError",
    "is_started",
    "mapper_registry",
    "provider_table",
    "shutdown",
    "start_mappers",
    "startup",
]
