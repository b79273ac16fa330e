"""Reusable fakes and helpers for provider reconciliation tests."""

from __future__ import annotations

import copy
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID

from domainwatch.domain.catalog import slugify
from domainwatch.domain.model import Provider, ProviderCategory, ProviderSource

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from domainwatch.domain.model import ProviderFields
    from domainwatch.domain.ports import ReferenceMigrator

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)

type ReferenceRows = dict[str, list[dict[str, UUID | None]]]


def make_provider(
    name: str,
    category: ProviderCategory = ProviderCategory.EMAIL,
    *,
    source: ProviderSource = ProviderSource.DISCOVERED,
    domain: str | None = None,
    slug: str | None = None,
    age: int = 0,
    provider_id: UUID | None = None,
) -> Provider:
    """Create a provider; larger ``age`` means created earlier."""

    created_at = _EPOCH - timedelta(minutes=age)
    provider = Provider(
        category=category,
        name=name,
        slug=slug if slug is not None else slugify(name),
        domain=domain,
        source=source,
        created_at=created_at,
        updated_at=created_at,
    )
    if provider_id is not None:
        provider.id = provider_id
    return provider


def make_catalog_provider(
    name: str,
    category: ProviderCategory = ProviderCategory.EMAIL,
    *,
    domain: str | None = None,
    slug: str | None = None,
    age: int = 0,
) -> Provider:
    return make_provider(
        name,
        category,
        source=ProviderSource.CATALOG,
        domain=domain,
        slug=slug,
        age=age,
    )


class InjectedFailure(RuntimeError):
    """Raised by the fake store where a test asked for a failure."""


class _FakeMigrator:
    def __init__(self, store: FakeProviderStore) -> None:
        self._store = store

    def update_reference(
        self,
        table: str,
        columns: Sequence[str],
        old_id: UUID,
        new_id: UUID,
    ) -> int:
        if table == self._store.fail_on_table:
            raise InjectedFailure(f"update of {table} failed")
        touched = 0
        for row in self._store.references.get(table, []):
            for column in columns:
                if row.get(column) == old_id:
                    row[column] = new_id
                    touched += 1
        return touched

    def delete_by_id(self, table: str, row_id: UUID) -> None:
        if self._store.fail_on_delete:
            raise InjectedFailure(f"delete from {table} failed")
        if self._store.is_referenced(row_id):
            raise InjectedFailure(f"{row_id} is still referenced")
        del self._store.providers[row_id]


class FakeProviderStore:
    """In-memory ``ProviderStore`` enforcing ``(category, slug)`` uniqueness.

    ``run_in_transaction`` snapshots providers and reference rows and restores
    them when the callback raises.
    """

    def __init__(
        self,
        providers: Iterable[Provider] = (),
        *,
        references: ReferenceRows | None = None,
    ) -> None:
        self.providers: dict[UUID, Provider] = {provider.id: provider for provider in providers}
        self.references: ReferenceRows = references or {}
        self.fail_on_table: str | None = None
        self.fail_on_delete = False
        self.insert_calls: list[list[Provider]] = []
        self.update_calls: list[tuple[UUID, ProviderFields]] = []
        self.transactions = 0

    def list_all(self) -> list[Provider]:
        return [
            provider.with_fields(provider.fields)
            for provider in sorted(self.providers.values(), key=lambda item: item.sort_key())
        ]

    def insert_many(self, providers: Sequence[Provider]) -> None:
        self.insert_calls.append(list(providers))
        for provider in providers:
            self._check_unique(provider.category, provider.slug, provider.id)
            self.providers[provider.id] = provider.with_fields(provider.fields)

    def update_fields(self, provider_id: UUID, fields: ProviderFields) -> None:
        self.update_calls.append((provider_id, fields))
        current = self.providers[provider_id]
        self._check_unique(current.category, fields.slug, provider_id)
        self.providers[provider_id] = current.with_fields(fields)

    def run_in_transaction[T](self, fn: Callable[[ReferenceMigrator], T]) -> T:
        self.transactions += 1
        providers = dict(self.providers)
        references = copy.deepcopy(self.references)
        try:
            return fn(_FakeMigrator(self))
        except Exception:
            self.providers = providers
            self.references = references
            raise

    def is_referenced(self, provider_id: UUID) -> bool:
        return any(
            provider_id in row.values() for rows in self.references.values() for row in rows
        )

    def by_name(self, name: str) -> list[Provider]:
        return [provider for provider in self.providers.values() if provider.name == name]

    def _check_unique(self, category: ProviderCategory, slug: str, provider_id: UUID) -> None:
        for other in self.providers.values():
            if other.id != provider_id and other.category == category and other.slug == slug:
                raise InjectedFailure(f"duplicate key {category}/{slug}")
