"""``ProviderStore`` implementation on top of SQLAlchemy units of work."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .unit_of_work import SqlAlchemyProviderUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from domainwatch.domain.model import Provider, ProviderFields
    from domainwatch.domain.ports import ProviderUnitOfWork, ReferenceMigrator

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SqlAlchemyProviderStore:
    """Each call runs in its own unit of work and commits on success."""

    unit_of_work_factory: Callable[[], ProviderUnitOfWork] = SqlAlchemyProviderUnitOfWork

    def list_all(self) -> list[Provider]:
        with self.unit_of_work_factory() as uow:
            return uow.repositories.providers.list_all()

    def insert_many(self, providers: Sequence[Provider]) -> None:
        if not providers:
            return
        with self.unit_of_work_factory() as uow:
            uow.repositories.providers.add_many(providers)
            uow.commit()
        log.debug(f"Inserted {len(providers)} providers")

    def update_fields(self, provider_id: UUID, fields: ProviderFields) -> None:
        with self.unit_of_work_factory() as uow:
            uow.repositories.providers.update_fields(provider_id, fields)
            uow.commit()

    def run_in_transaction[T](self, fn: Callable[[ReferenceMigrator], T]) -> T:
        with self.unit_of_work_factory() as uow:
            result = fn(uow.repositories.references)
            uow.commit()
        return result


if TYPE_CHECKING:
    from domainwatch.domain.ports import ProviderStore

    _store_check: ProviderStore = SqlAlchemyProviderStore()
