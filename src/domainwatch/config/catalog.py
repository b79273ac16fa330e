"""Provider catalog source configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import float_env_var, optional_env_var
from .errors import ConfigurationError

DEFAULT_CATALOG_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Where the provider catalog is read from.

    With neither ``path`` nor ``url`` set the built-in catalog is used.
    """

    path: Path | None = None
    url: str | None = None
    timeout_seconds: float = DEFAULT_CATALOG_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.path is not None and self.url is not None:
            raise ConfigurationError("Configure either a catalog path or a catalog URL, not both")

    @property
    def is_builtin(self) -> bool:
        return self.path is None and self.url is None


def get_catalog_config(*, path: str | None = None, url: str | None = None) -> CatalogConfig:
    """Build the catalog config, letting explicit arguments override the environment."""

    if path is None and url is None:
        path = optional_env_var("DOMAINWATCH_CATALOG_PATH")
        url = optional_env_var("DOMAINWATCH_CATALOG_URL")
    return CatalogConfig(
        path=Path(path).expanduser() if path else None,
        url=url,
        timeout_seconds=float_env_var(
            "DOMAINWATCH_CATALOG_TIMEOUT", default=DEFAULT_CATALOG_TIMEOUT_SECONDS
        ),
    )
