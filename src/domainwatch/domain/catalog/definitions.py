"""Catalog definitions: the canonical, source-controlled provider list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from domainwatch.domain.model import ProviderCategory, ProviderFields, ProviderSource

from .slugs import slugify

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from domainwatch.domain.detection import Rule
    from domainwatch.domain.model import ProviderKey

CATEGORY_ORDER: Final[tuple[ProviderCategory, ...]] = (
    ProviderCategory.DNS,
    ProviderCategory.EMAIL,
    ProviderCategory.HOSTING,
    ProviderCategory.REGISTRAR,
    ProviderCategory.CA,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogDefinition:
    """One catalog provider with its (optional) detection rule."""

    name: str
    category: ProviderCategory
    domain: str | None = None
    rule: Rule | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Catalog provider name must not be blank")
        if not slugify(self.name):
            raise ValueError(f"Catalog provider name {self.name!r} has no usable slug")

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def key(self) -> ProviderKey:
        return (self.category, self.slug)

    @property
    def normalized_domain(self) -> str | None:
        return self.domain.strip().lower() if self.domain else None

    @property
    def fields(self) -> ProviderFields:
        return ProviderFields(
            name=self.name,
            slug=self.slug,
            domain=self.normalized_domain,
            source=ProviderSource.CATALOG,
        )


@dataclass(frozen=True, slots=True)
class ProviderCatalog:
    """Versioned catalog grouped by category."""

    version: int
    providers: Mapping[ProviderCategory, tuple[CatalogDefinition, ...]] = field(
        default_factory=dict["ProviderCategory", "tuple[CatalogDefinition, ...]"]
    )

    def for_category(self, category: ProviderCategory) -> tuple[CatalogDefinition, ...]:
        return tuple(self.providers.get(category, ()))

    def definitions(self) -> list[CatalogDefinition]:
        """Flatten the catalog in reconciliation order."""

        return definitions_from_catalog(self)


def definitions_from_catalog(catalog: ProviderCatalog) -> list[CatalogDefinition]:
    definitions: list[CatalogDefinition] = []
    for category in CATEGORY_ORDER:
        definitions.extend(catalog.for_category(category))
    return definitions


def build_catalog(
    version: int,
    entries: Iterable[CatalogDefinition],
) -> ProviderCatalog:
    grouped: dict[ProviderCategory, list[CatalogDefinition]] = {}
    for entry in entries:
        grouped.setdefault(entry.category, []).append(entry)
    return ProviderCatalog(
        version=version,
        providers={category: tuple(items) for category, items in grouped.items()},
    )
