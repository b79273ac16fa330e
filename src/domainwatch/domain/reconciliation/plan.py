"""Plan and result types for one reconciliation pass.

Planning is pure: it reads a provider snapshot and a catalog and produces the
writes to perform. Executing (or, in a dry run, only describing) those writes
is the engine's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from domainwatch.domain.model import Provider, ProviderCategory, ProviderFields


def _label(category: ProviderCategory, slug: str) -> str:
    return f"{category}/{slug}"


@dataclass(frozen=True, slots=True, kw_only=True)
class PlannedUpdate:
    """Field update for an existing provider row.

    ``replaced`` marks a discovered provider taken over by a catalog definition
    whose rule matched it; its identifier is kept so references stay valid.
    """

    provider_id: UUID
    category: ProviderCategory
    previous: ProviderFields
    fields: ProviderFields
    replaced: bool = False

    def changes(self) -> list[str]:
        changed: list[str] = []
        for name in ("name", "slug", "domain", "source"):
            before = getattr(self.previous, name)
            after = getattr(self.fields, name)
            if before != after:
                changed.append(f"{name} {before!r} -> {after!r}")
        return changed

    def describe(self) -> str:
        if self.replaced:
            return (
                f"replace discovered {_label(self.category, self.previous.slug)} "
                f"({self.previous.name}) with catalog {self.fields.name}"
            )
        return f"update {_label(self.category, self.fields.slug)}: {', '.join(self.changes())}"


@dataclass(frozen=True, slots=True, kw_only=True)
class MergePlan:
    """Fold a discovered provider into the catalog provider whose rule matches it."""

    category: ProviderCategory
    discovered_id: UUID
    discovered_name: str
    catalog_id: UUID
    catalog_name: str

    def describe(self) -> str:
        return (
            f"merge discovered {self.category} provider {self.discovered_name} "
            f"into {self.catalog_name}"
        )


@dataclass(slots=True)
class SyncPlan:
    """Inserts and updates needed to bring the table in line with the catalog.

    ``deferred`` holds renames onto a key still held by a discovered provider
    the same rule matches; they run after that provider has been merged.
    """

    inserts: list[Provider] = field(default_factory=list["Provider"])
    updates: list[PlannedUpdate] = field(default_factory=list["PlannedUpdate"])
    deferred: list[PlannedUpdate] = field(default_factory=list["PlannedUpdate"])
    warnings: list[str] = field(default_factory=list[str])

    @property
    def replacements(self) -> list[PlannedUpdate]:
        return [update for update in self.updates if update.replaced]

    def describe(self) -> list[str]:
        lines = [
            f"insert {_label(provider.category, provider.slug)} ({provider.name})"
            for provider in self.inserts
        ]
        lines.extend(update.describe() for update in self.updates)
        lines.extend(f"{update.describe()} (after merge)" for update in self.deferred)
        return lines


@dataclass(slots=True, kw_only=True)
class ReconcileResult:
    """Outcome of a reconciliation pass.

    Counts are the same in a dry run; ``preview`` then lists what would have
    been written.
    """

    inserted: int = 0
    updated: int = 0
    cleaned: int = 0
    repointed: int = 0
    dry_run: bool = False
    preview: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])

    def summary(self) -> str:
        prefix = "[dry-run] " if self.dry_run else ""
        return (
            f"{prefix}Provider catalog sync complete: inserted {self.inserted}, "
            f"updated {self.updated}, cleaned {self.cleaned}"
        )
