"""Ports for persisting providers and their foreign-key references."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from domainwatch.domain.model import Provider, ProviderFields


@runtime_checkable
class ReferenceMigrator(Protocol):
    """Write handle available inside one store transaction."""

    def update_reference(
        self,
        table: str,
        columns: Sequence[str],
        old_id: UUID,
        new_id: UUID,
    ) -> int:
        """Repoint ``columns`` of ``table`` from ``old_id`` to ``new_id``; return rows touched."""
        ...

    def delete_by_id(self, table: str, row_id: UUID) -> None: ...


@runtime_checkable
class ProviderStore(Protocol):
    """Storage operations the reconciliation engine consumes."""

    def list_all(self) -> list[Provider]: ...

    def insert_many(self, providers: Sequence[Provider]) -> None: ...

    def update_fields(self, provider_id: UUID, fields: ProviderFields) -> None: ...

    def run_in_transaction[T](self, fn: Callable[[ReferenceMigrator], T]) -> T:
        """Run ``fn`` atomically: commit when it returns, roll back when it raises."""
        ...


@runtime_checkable
class ProviderRepository(Protocol):
    """Persistence contract for provider rows within one unit of work."""

    def list_all(self) -> list[Provider]: ...

    def add_many(self, providers: Sequence[Provider]) -> None: ...

    def update_fields(self, provider_id: UUID, fields: ProviderFields) -> None: ...


@runtime_checkable
class ReferenceRepository(ReferenceMigrator, Protocol):
    """Persistence contract for rows that point at providers."""
