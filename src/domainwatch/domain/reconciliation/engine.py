"""Provider catalog reconciliation.

One pass walks the catalog in order and, per definition:

1. finds the row it already owns and updates drifted fields, unless the new
   ``(category, slug)`` belongs to another row. When that row is a discovered
   provider the same rule matches, the update waits until it has been merged;
2. otherwise takes over the oldest discovered provider its rule matches;
3. otherwise inserts a new catalog provider.

Afterwards every discovered provider still matched by a catalog rule is merged
into that catalog provider: references are repointed and the discovered row is
deleted inside one store transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from domainwatch.domain.model import Provider, ProviderSource

from .errors import ProviderMergeError
from .index import ProviderIndex
from .matcher import matches
from .plan import MergePlan, PlannedUpdate, ReconcileResult, SyncPlan
from .references import PROVIDER_REFERENCES, PROVIDERS_TABLE, ReferenceColumn, columns_by_table

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from domainwatch.domain.catalog import CatalogDefinition
    from domainwatch.domain.model import ProviderCategory, ProviderKey
    from domainwatch.domain.ports import ProviderStore, ReferenceMigrator

log = logging.getLogger(__name__)


def plan_catalog_sync(
    definitions: Iterable[CatalogDefinition],
    providers: Iterable[Provider],
) -> SyncPlan:
    """Plan inserts, drift updates and replacements for ``definitions``."""

    index = ProviderIndex(providers)
    plan = SyncPlan()
    inserted_keys: set[ProviderKey] = set()
    claimed_keys: set[ProviderKey] = set()

    for definition in definitions:
        target = definition.fields
        if definition.key in inserted_keys:
            _warn(
                plan,
                "Skipping duplicate insert for %s/%s (%s)",
                definition.category,
                definition.slug,
                definition.name,
            )
            continue
        if definition.key in claimed_keys:
            _warn(
                plan,
                "Skipping duplicate catalog entry %s/%s (%s)",
                definition.category,
                definition.slug,
                definition.name,
            )
            continue

        existing = index.lookup(definition)
        if existing is not None:
            if existing.fields == target:
                claimed_keys.add(definition.key)
                continue
            owner = index.owner_of(definition.key)
            if owner is not None and owner is not existing and _merges_into(definition, owner):
                log.info(
                    "Deferring update of %s to %s/%s until discovered %s is merged",
                    existing.name,
                    definition.category,
                    definition.slug,
                    owner.name,
                )
                plan.deferred.append(
                    PlannedUpdate(
                        provider_id=existing.id,
                        category=existing.category,
                        previous=existing.fields,
                        fields=target,
                    )
                )
                index.claim(owner)
                index.apply(existing, target)
                claimed_keys.add(definition.key)
                continue
            if owner is not None and owner is not existing:
                _warn(
                    plan,
                    "Skipping update for %s (%s/%s): conflicts with existing record %s (%s)",
                    existing.name,
                    existing.category,
                    definition.slug,
                    owner.name,
                    owner.id,
                )
                claimed_keys.add(existing.key)
                continue
            plan.updates.append(
                PlannedUpdate(
                    provider_id=existing.id,
                    category=existing.category,
                    previous=existing.fields,
                    fields=target,
                )
            )
            index.apply(existing, target)
            claimed_keys.add(definition.key)
            continue

        replaced = _find_replacement(index, definition)
        if replaced is not None:
            log.info(
                "Replacing discovered %s provider %s with catalog %s (rule match)",
                definition.category,
                replaced.name,
                definition.name,
            )
            plan.updates.append(
                PlannedUpdate(
                    provider_id=replaced.id,
                    category=replaced.category,
                    previous=replaced.fields,
                    fields=target,
                    replaced=True,
                )
            )
            index.apply(replaced, target)
            claimed_keys.add(definition.key)
            continue

        plan.inserts.append(
            Provider(
                category=definition.category,
                name=target.name,
                slug=target.slug,
                domain=target.domain,
                source=ProviderSource.CATALOG,
            )
        )
        inserted_keys.add(definition.key)

    return plan


def project(providers: Iterable[Provider], plan: SyncPlan) -> list[Provider]:
    """Return the provider table as it would look after ``plan`` is applied."""

    updates = {update.provider_id: update for update in plan.updates}
    projected: list[Provider] = []
    for provider in providers:
        update = updates.get(provider.id)
        projected.append(provider if update is None else provider.with_fields(update.fields))
    projected.extend(plan.inserts)
    return projected


def plan_merges(
    definitions: Iterable[CatalogDefinition],
    providers: Sequence[Provider],
) -> list[MergePlan]:
    """Pair every discovered provider with the first catalog provider whose rule matches it."""

    index = ProviderIndex(providers)
    candidates: dict[ProviderCategory, list[tuple[CatalogDefinition, Provider]]] = {}
    for definition in definitions:
        if definition.rule is None:
            continue
        catalog_row = index.lookup(definition)
        if catalog_row is None or catalog_row.is_discovered:
            continue
        candidates.setdefault(definition.category, []).append((definition, catalog_row))

    merges: list[MergePlan] = []
    for discovered in sorted(
        (provider for provider in providers if provider.is_discovered),
        key=lambda provider: provider.sort_key(),
    ):
        for definition, catalog_row in candidates.get(discovered.category, ()):
            if matches(definition, discovered):
                merges.append(
                    MergePlan(
                        category=discovered.category,
                        discovered_id=discovered.id,
                        discovered_name=discovered.name,
                        catalog_id=catalog_row.id,
                        catalog_name=catalog_row.name,
                    )
                )
                break
    return merges


@dataclass(slots=True)
class ProviderReconciler:
    """Run reconciliation passes against a provider store."""

    store: ProviderStore
    references: tuple[ReferenceColumn, ...] = PROVIDER_REFERENCES

    def reconcile(
        self,
        definitions: Iterable[CatalogDefinition],
        *,
        dry_run: bool = False,
    ) -> ReconcileResult:
        definitions = list(definitions)
        result = ReconcileResult(dry_run=dry_run)

        snapshot = self.store.list_all()
        plan = plan_catalog_sync(definitions, snapshot)
        result.warnings.extend(plan.warnings)
        result.inserted = len(plan.inserts)
        result.updated = len(plan.updates) + len(plan.deferred)
        result.preview.extend(plan.describe())

        if dry_run:
            for line in plan.describe():
                log.info("[dry-run] Would %s", line)
            remaining = project(snapshot, plan)
        else:
            self._apply(plan)
            remaining = self.store.list_all()

        merges = plan_merges(definitions, remaining)
        for merge in merges:
            result.preview.append(merge.describe())
            if dry_run:
                log.info("[dry-run] Would %s", merge.describe())
                continue
            result.repointed += self._merge(merge)
        result.cleaned = len(merges)
        if not dry_run:
            self._apply_updates(plan.deferred)

        log.info(result.summary())
        return result

    def _apply(self, plan: SyncPlan) -> None:
        if plan.inserts:
            self.store.insert_many(plan.inserts)
            for provider in plan.inserts:
                log.info("Inserted catalog provider %s/%s", provider.category, provider.slug)
        self._apply_updates(plan.updates)

    def _apply_updates(self, updates: Sequence[PlannedUpdate]) -> None:
        for update in updates:
            self.store.update_fields(update.provider_id, update.fields)
            log.info("Updated provider: %s", update.describe())

    def _merge(self, merge: MergePlan) -> int:
        grouped = columns_by_table(self.references)

        def repoint_and_delete(tx: ReferenceMigrator) -> int:
            touched = 0
            for table, columns in grouped.items():
                touched += tx.update_reference(
                    table,
                    columns,
                    merge.discovered_id,
                    merge.catalog_id,
                )
            tx.delete_by_id(PROVIDERS_TABLE, merge.discovered_id)
            return touched

        try:
            touched = self.store.run_in_transaction(repoint_and_delete)
        except Exception as exc:
            log.exception(
                "Failed to merge discovered provider %s into %s",
                merge.discovered_name,
                merge.catalog_name,
            )
            raise ProviderMergeError(merge) from exc

        log.info(
            "Merged discovered provider %s into %s (%d references repointed)",
            merge.discovered_name,
            merge.catalog_name,
            touched,
        )
        return touched


def reconcile(
    definitions: Iterable[CatalogDefinition],
    *,
    store: ProviderStore,
    dry_run: bool = False,
) -> ReconcileResult:
    """Run one reconciliation pass of ``definitions`` against ``store``."""

    return ProviderReconciler(store).reconcile(definitions, dry_run=dry_run)


def _merges_into(definition: CatalogDefinition, owner: Provider) -> bool:
    return owner.is_discovered and matches(definition, owner)


def _find_replacement(index: ProviderIndex, definition: CatalogDefinition) -> Provider | None:
    if definition.rule is None:
        return None
    for candidate in index.discovered_in(definition.category):
        if matches(definition, candidate):
            return candidate
    return None


def _warn(plan: SyncPlan, message: str, *args: object) -> None:
    log.warning(message, *args)
    plan.warnings.append(message % args)
