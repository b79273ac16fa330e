"""Read provider catalogs from files or over HTTP."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from httpx_retries import Retry, RetryTransport

from domainwatch.config import DEFAULT_CATALOG_TIMEOUT_SECONDS
from domainwatch.domain.catalog import get_default_catalog

from .errors import CatalogFetchError
from .translator import parse_catalog_json

if TYPE_CHECKING:
    from pathlib import Path

    from domainwatch.config import CatalogConfig
    from domainwatch.domain.catalog import ProviderCatalog

log = logging.getLogger(__name__)

CATALOG_FETCH_RETRY = Retry(total=3, backoff_factor=0.5)


def load_catalog_file(path: Path) -> ProviderCatalog:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise CatalogFetchError(
            f"Could not read provider catalog {path}: {exc}", source=str(path)
        ) from exc
    catalog = parse_catalog_json(raw)
    log.info(f"Loaded provider catalog version {catalog.version} from {path}")
    return catalog


def fetch_catalog(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout_seconds: float = DEFAULT_CATALOG_TIMEOUT_SECONDS,
) -> ProviderCatalog:
    """Download and parse a catalog document.

    ``client`` lets callers supply their own transport; otherwise a short-lived
    client retries transient failures with ``CATALOG_FETCH_RETRY``.
    """

    owns_client = client is None
    http = client or httpx.Client(
        timeout=timeout_seconds,
        follow_redirects=True,
        transport=RetryTransport(retry=CATALOG_FETCH_RETRY),
    )
    try:
        response = http.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise CatalogFetchError(
            f"Provider catalog request failed with status {exc.response.status_code}",
            source=url,
        ) from exc
    except httpx.HTTPError as exc:
        raise CatalogFetchError(f"Provider catalog request failed: {exc}", source=url) from exc
    finally:
        if owns_client:
            http.close()

    catalog = parse_catalog_json(response.content)
    log.info(f"Fetched provider catalog version {catalog.version} from {url}")
    return catalog


def load_catalog(config: CatalogConfig) -> ProviderCatalog:
    """Resolve the catalog ``config`` points at, falling back to the built-in one."""

    if config.path is not None:
        return load_catalog_file(config.path)
    if config.url is not None:
        return fetch_catalog(config.url, timeout_seconds=config.timeout_seconds)
    log.info("Using built-in provider catalog")
    return get_default_catalog()
