"""In-memory provider lookup for a single reconciliation pass.

The index is created from a snapshot of the provider table and mutated as the
pass queues updates, so a discovered provider claimed by one catalog
definition is no longer visible as discovered to the definitions after it.
It is local to one pass and never shared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from domainwatch.domain.catalog import CatalogDefinition
    from domainwatch.domain.model import (
        Provider,
        ProviderCategory,
        ProviderFields,
        ProviderKey,
    )

type _NameKey = tuple[ProviderCategory, str]


def _name_key(category: ProviderCategory, name: str) -> _NameKey:
    return (category, name.strip().casefold())


class ProviderIndex:
    def __init__(self, providers: Iterable[Provider]) -> None:
        self._by_key: dict[ProviderKey, Provider] = {}
        self._catalog_by_name: dict[_NameKey, Provider] = {}
        self._claimed: set[UUID] = set()
        for provider in sorted(providers, key=lambda item: item.sort_key()):
            self._register(provider)

    def providers(self) -> list[Provider]:
        return sorted(self._by_key.values(), key=lambda item: item.sort_key())

    def lookup(self, definition: CatalogDefinition) -> Provider | None:
        """Find the row a catalog definition already owns.

        A catalog row with the same name (case-insensitive) wins over the exact
        ``(category, slug)`` row: it is the same catalog entry stored under an
        older slug.
        """

        by_name = self._catalog_by_name.get(_name_key(definition.category, definition.name))
        if by_name is not None:
            return by_name
        return self._by_key.get(definition.key)

    def owner_of(self, key: ProviderKey) -> Provider | None:
        return self._by_key.get(key)

    def discovered_in(self, category: ProviderCategory) -> list[Provider]:
        """Discovered providers of ``category`` not yet claimed, oldest first."""

        return [
            provider
            for provider in self.providers()
            if provider.category == category
            and provider.is_discovered
            and provider.id not in self._claimed
        ]

    def claim(self, provider: Provider) -> None:
        """Hide a discovered provider from later replacement scans."""

        self._claimed.add(provider.id)

    def apply(self, provider: Provider, fields: ProviderFields) -> Provider:
        """Record that ``provider`` will carry ``fields``; return the projected row."""

        if self._by_key.get(provider.key) is provider:
            del self._by_key[provider.key]
        stale_name = _name_key(provider.category, provider.name)
        if self._catalog_by_name.get(stale_name) is provider:
            del self._catalog_by_name[stale_name]
        projected = provider.with_fields(fields)
        self._register(projected)
        return projected

    def _register(self, provider: Provider) -> None:
        self._by_key.setdefault(provider.key, provider)
        if not provider.is_discovered:
            self._catalog_by_name.setdefault(_name_key(provider.category, provider.name), provider)
