"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from domainwatch.adapters.catalog import load_catalog
from domainwatch.adapters.sqlalchemy import SqlAlchemyProviderStore, is_started, startup
from domainwatch.config import get_catalog_config
from domainwatch.domain.reconciliation import reconcile

if TYPE_CHECKING:
    from domainwatch.config import CatalogConfig
    from domainwatch.domain.catalog import ProviderCatalog
    from domainwatch.domain.ports import ProviderStore
    from domainwatch.domain.reconciliation import ReconcileResult


log = getLogger(__name__)


def seed_providers(
    *,
    dry_run: bool = False,
    catalog_config: CatalogConfig | None = None,
    catalog: ProviderCatalog | None = None,
    store: ProviderStore | None = None,
) -> ReconcileResult:
    """Reconcile the provider table with the configured catalog.

    ``catalog`` and ``store`` default to the configured catalog source and the
    SQLAlchemy store (initialising the database on first use).
    """

    effective_catalog = catalog or load_catalog(catalog_config or get_catalog_config())
    if store is None:
        if not is_started():
            startup()
        store = SqlAlchemyProviderStore()

    definitions = effective_catalog.definitions()
    log.info(
        "Starting provider catalog sync: catalog_version=%s, definitions=%s, dry_run=%s",
        effective_catalog.version,
        len(definitions),
        dry_run,
    )
    return reconcile(definitions, store=store, dry_run=dry_run)
