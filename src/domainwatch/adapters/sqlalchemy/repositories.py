"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select, update

from domainwatch.domain.model import Provider, utcnow

from .mappings import mapper_registry, provider_table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from domainwatch.domain.model import ProviderFields


class SqlAlchemyProviderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Provider]:
        stmt = select(Provider).order_by(provider_table.c.created_at, provider_table.c.id)
        return list(self.session.execute(stmt).scalars())

    def add_many(self, providers: Sequence[Provider]) -> None:
        self.session.add_all(providers)
        self.session.flush()

    def update_fields(self, provider_id: UUID, fields: ProviderFields) -> None:
        stmt = (
            update(provider_table)
            .where(provider_table.c.id == provider_id)
            .values(
                name=fields.name,
                slug=fields.slug,
                domain=fields.domain,
                source=fields.source,
                updated_at=utcnow(),
            )
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise LookupError(f"Provider {provider_id} does not exist")


class SqlAlchemyReferenceRepository:
    """Rewrites and deletes rows by table name, for provider merges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def update_reference(
        self,
        table: str,
        columns: Sequence[str],
        old_id: UUID,
        new_id: UUID,
    ) -> int:
        target = self._table(table)
        touched = 0
        for column_name in columns:
            column = target.c[column_name]
            result = self.session.execute(
                update(target).where(column == old_id).values({column_name: new_id})
            )
            touched += result.rowcount
        return touched

    def delete_by_id(self, table: str, row_id: UUID) -> None:
        target = self._table(table)
        result = self.session.execute(delete(target).where(target.c.id == row_id))
        if result.rowcount == 0:
            raise LookupError(f"No row {row_id} in {table}")

    def _table(self, name: str) -> Table:
        try:
            return mapper_registry.metadata.tables[name]
        except KeyError:
            raise LookupError(f"Unknown table {name!r}") from None
