from __future__ import annotations

import pytest

from domainwatch.domain.catalog import (
    CATEGORY_ORDER,
    DEFAULT_CATALOG,
    CatalogDefinition,
    build_catalog,
    definitions_from_catalog,
    slugify,
)
from domainwatch.domain.detection import mx_suffix
from domainwatch.domain.model import ProviderCategory, ProviderSource


def test_definition_fields_are_catalog_sourced_and_normalised() -> None:
    definition = CatalogDefinition(
        name="Tuta",
        category=ProviderCategory.EMAIL,
        domain=" Tuta.COM ",
        rule=mx_suffix("tuta.com"),
    )

    fields = definition.fields

    assert definition.key == (ProviderCategory.EMAIL, "tuta")
    assert fields.slug == "tuta"
    assert fields.domain == "tuta.com"
    assert fields.source is ProviderSource.CATALOG


@pytest.mark.parametrize("name", ["", "   ", "???"])
def test_definition_rejects_names_without_slug(name: str) -> None:
    with pytest.raises(ValueError, match="name"):
        CatalogDefinition(name=name, category=ProviderCategory.DNS)


def test_definitions_are_flattened_in_category_order() -> None:
    catalog = build_catalog(
        3,
        [
            CatalogDefinition(name="B", category=ProviderCategory.CA),
            CatalogDefinition(name="A", category=ProviderCategory.EMAIL),
            CatalogDefinition(name="C", category=ProviderCategory.DNS),
            CatalogDefinition(name="D", category=ProviderCategory.EMAIL),
        ],
    )

    names = [definition.name for definition in definitions_from_catalog(catalog)]

    assert catalog.version == 3
    assert names == ["C", "A", "D", "B"]


def test_default_catalog_covers_every_category_with_unique_keys() -> None:
    definitions = DEFAULT_CATALOG.definitions()
    keys = [definition.key for definition in definitions]

    assert len(keys) == len(set(keys))
    for category in CATEGORY_ORDER:
        assert DEFAULT_CATALOG.for_category(category)
    assert all(definition.rule is not None for definition in definitions)
    assert all(slugify(definition.name) for definition in definitions)


def test_default_catalog_lists_tuta_as_email_provider() -> None:
    tuta = [d for d in DEFAULT_CATALOG.for_category(ProviderCategory.EMAIL) if d.name == "Tuta"]

    assert len(tuta) == 1
    assert tuta[0].domain == "tuta.com"
