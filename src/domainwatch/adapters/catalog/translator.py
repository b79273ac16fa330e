"""Translate validated catalog documents into domain catalog definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domainwatch.domain.catalog import CatalogDefinition, ProviderCatalog
from domainwatch.domain.detection import (
    Rule,
    all_of,
    any_of,
    header_equals,
    header_includes,
    header_present,
    issuer_equals,
    issuer_includes,
    mx_regex,
    mx_suffix,
    not_,
    ns_regex,
    ns_suffix,
    registrar_equals,
    registrar_includes,
)
from domainwatch.domain.model import ProviderCategory

from .errors import CatalogValidationError
from .schema import (
    AllOfModel,
    AnyOfModel,
    CatalogDocument,
    HeaderEqualsModel,
    HeaderIncludesModel,
    HeaderPresentModel,
    IssuerEqualsModel,
    IssuerIncludesModel,
    MxRegexModel,
    MxSuffixModel,
    NotModel,
    NsRegexModel,
    NsSuffixModel,
    RegistrarEqualsModel,
    RegistrarIncludesModel,
)

if TYPE_CHECKING:
    from .schema import ProviderEntryModel, RuleModel


def translate_rule(model: RuleModel) -> Rule:
    match model:
        case AllOfModel(children=children):
            return all_of(*(translate_rule(child) for child in children))
        case AnyOfModel(children=children):
            return any_of(*(translate_rule(child) for child in children))
        case NotModel(child=child):
            return not_(translate_rule(child))
        case HeaderEqualsModel(name=name, value=value):
            return header_equals(name, value)
        case HeaderIncludesModel(name=name, substr=substr):
            return header_includes(name, substr)
        case HeaderPresentModel(name=name):
            return header_present(name)
        case MxSuffixModel(suffix=suffix):
            return mx_suffix(suffix)
        case MxRegexModel(pattern=pattern, flags=flags):
            return mx_regex(pattern, flags)
        case NsSuffixModel(suffix=suffix):
            return ns_suffix(suffix)
        case NsRegexModel(pattern=pattern, flags=flags):
            return ns_regex(pattern, flags)
        case IssuerEqualsModel(value=value):
            return issuer_equals(value)
        case IssuerIncludesModel(substr=substr):
            return issuer_includes(substr)
        case RegistrarEqualsModel(value=value):
            return registrar_equals(value)
        case RegistrarIncludesModel(substr=substr):
            return registrar_includes(substr)
        case _:
            raise CatalogValidationError(f"Unsupported catalog rule: {model!r}")


def translate_entry(entry: ProviderEntryModel, category: ProviderCategory) -> CatalogDefinition:
    return CatalogDefinition(
        name=entry.name.strip(),
        category=category,
        domain=entry.domain,
        rule=translate_rule(entry.rule) if entry.rule is not None else None,
    )


def translate_catalog(document: CatalogDocument) -> ProviderCatalog:
    providers: dict[ProviderCategory, tuple[CatalogDefinition, ...]] = {}
    for category in ProviderCategory:
        entries: list[ProviderEntryModel] = getattr(document, category.value)
        providers[category] = tuple(translate_entry(entry, category) for entry in entries)
    return ProviderCatalog(version=document.version, providers=providers)


def parse_catalog(payload: object) -> ProviderCatalog:
    """Validate a decoded catalog document and translate it.

    Raises ``CatalogValidationError`` when the payload is not a valid catalog.
    """

    try:
        document = CatalogDocument.model_validate(payload)
        return translate_catalog(document)
    except ValueError as exc:
        raise CatalogValidationError(f"Invalid provider catalog: {exc}") from exc


def parse_catalog_json(text: str | bytes) -> ProviderCatalog:
    """Parse a JSON catalog document."""

    try:
        document = CatalogDocument.model_validate_json(text)
        return translate_catalog(document)
    except ValueError as exc:
        raise CatalogValidationError(f"Invalid provider catalog: {exc}") from exc
