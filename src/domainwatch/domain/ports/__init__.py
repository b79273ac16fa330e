"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ProviderRepository, ProviderStore, ReferenceMigrator, ReferenceRepository
from .unit_of_work import ProviderRepositories, ProviderUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "ProviderRepositories",
    "ProviderRepository",
    "ProviderStore",
    "ProviderUnitOfWork",
    "ReferenceMigrator",
    "ReferenceRepository",
    "RepositoryCollection",
    "UnitOfWork",
]
