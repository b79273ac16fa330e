"""Provider entity and its catalog-derived field set."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from .enums import ProviderCategory, ProviderSource

if TYPE_CHECKING:
    from collections.abc import Hashable


def new_id() -> UUID:
    return uuid4()


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


type ProviderKey = tuple[ProviderCategory, str]


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderFields:
    """Mutable provider columns that the catalog owns."""

    name: str
    slug: str
    domain: str | None
    source: ProviderSource


@dataclass(eq=False, kw_only=True)
class Provider:
    """An organisation acting as DNS/email/web host, CA or registrar for domains.

    ``(category, slug)`` is unique across providers; ``domain`` is not, several
    services of one parent company commonly share it.
    """

    id: UUID = field(default_factory=new_id)
    category: ProviderCategory
    name: str
    slug: str
    domain: str | None = None
    source: ProviderSource = ProviderSource.DISCOVERED
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def key(self) -> ProviderKey:
        return (self.category, self.slug)

    @property
    def is_discovered(self) -> bool:
        return self.source == ProviderSource.DISCOVERED

    @property
    def fields(self) -> ProviderFields:
        return ProviderFields(
            name=self.name,
            slug=self.slug,
            domain=self.domain,
            source=self.source,
        )

    def sort_key(self) -> tuple[Hashable, ...]:
        """Deterministic ordering: oldest first, identifier as tie-break."""

        return (self.created_at, str(self.id))

    def with_fields(self, fields: ProviderFields) -> Provider:
        """Return a detached copy carrying ``fields`` (used for dry-run projections)."""

        return Provider(
            id=self.id,
            category=self.category,
            name=fields.name,
            slug=fields.slug,
            domain=fields.domain,
            source=fields.source,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
