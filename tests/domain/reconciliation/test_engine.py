from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from domainwatch.domain.catalog import DEFAULT_CATALOG, CatalogDefinition
from domainwatch.domain.detection import any_of, header_present, mx_suffix, ns_suffix
from domainwatch.domain.model import ProviderCategory, ProviderSource
from domainwatch.domain.reconciliation import (
    ProviderMergeError,
    ProviderReconciler,
    plan_catalog_sync,
    reconcile,
)
from tests.helpers.providers import (
    FakeProviderStore,
    InjectedFailure,
    make_catalog_provider,
    make_provider,
)

if TYPE_CHECKING:
    from domainwatch.domain.model import Provider

EMAIL = ProviderCategory.EMAIL
DNS = ProviderCategory.DNS
HOSTING = ProviderCategory.HOSTING

TUTA = CatalogDefinition(
    name="Tuta",
    category=EMAIL,
    domain="tuta.com",
    rule=any_of(mx_suffix("tutanota.de"), mx_suffix("tuta.com")),
)
FASTMAIL = CatalogDefinition(
    name="Fastmail",
    category=EMAIL,
    domain="fastmail.com",
    rule=any_of(mx_suffix("fastmail.com"), mx_suffix("messagingengine.com")),
)
CLOUDFLARE = CatalogDefinition(
    name="Cloudflare",
    category=DNS,
    domain="cloudflare.com",
    rule=ns_suffix("cloudflare.com"),
)
VERCEL = CatalogDefinition(
    name="Vercel",
    category=HOSTING,
    domain="vercel.com",
    rule=header_present("x-vercel-id"),
)


def _keys(providers: list[Provider]) -> list[tuple[ProviderCategory, str]]:
    return [provider.key for provider in providers]


def test_empty_table_inserts_every_definition() -> None:
    store = FakeProviderStore()
    definitions = DEFAULT_CATALOG.definitions()

    result = reconcile(definitions, store=store)

    assert result.inserted == len(definitions)
    assert result.updated == 0
    assert result.cleaned == 0
    assert len(store.insert_calls) == 1
    assert all(p.source is ProviderSource.CATALOG for p in store.providers.values())


def test_second_run_is_a_no_op() -> None:
    store = FakeProviderStore(
        [
            make_provider("mail.tutanota.de", EMAIL, age=5),
            make_provider("in1-smtp.messagingengine.com", EMAIL, age=4),
            make_provider("kai.ns.cloudflare.com", DNS, age=3),
            make_provider("Vercel", HOSTING, domain="vercel.com", age=2),
        ]
    )
    definitions = DEFAULT_CATALOG.definitions()

    first = reconcile(definitions, store=store)
    second = reconcile(definitions, store=store)

    assert (first.inserted, first.updated) != (0, 0)
    assert (second.inserted, second.updated, second.cleaned) == (0, 0, 0)
    assert second.warnings == []


def test_replaces_discovered_provider_in_place() -> None:
    discovered = make_provider("mail.tutanota.de", EMAIL)
    store = FakeProviderStore(
        [discovered],
        references={"hosting": [{"domain_id": None, "email_provider_id": discovered.id}]},
    )

    result = reconcile([TUTA], store=store)

    assert (result.inserted, result.updated, result.cleaned) == (0, 1, 0)
    replaced = store.providers[discovered.id]
    assert replaced.name == "Tuta"
    assert replaced.slug == "tuta"
    assert replaced.domain == "tuta.com"
    assert replaced.source is ProviderSource.CATALOG
    assert store.references["hosting"][0]["email_provider_id"] == discovered.id
    assert any(line.startswith("replace discovered") for line in result.preview)


def test_oldest_discovered_is_replaced_and_later_ones_merged() -> None:
    older = make_provider("mail.tutanota.de", EMAIL, age=10)
    younger = make_provider("mx.tuta.com", EMAIL, age=1)
    store = FakeProviderStore(
        [younger, older],
        references={"hosting": [{"domain_id": None, "email_provider_id": younger.id}]},
    )

    result = reconcile([TUTA], store=store)

    assert (result.inserted, result.updated, result.cleaned) == (0, 1, 1)
    assert list(store.providers) == [older.id]
    assert store.providers[older.id].name == "Tuta"
    assert store.references["hosting"][0]["email_provider_id"] == older.id
    assert result.repointed == 1


def test_inserts_when_nothing_matches() -> None:
    unrelated = make_provider("mx.example.org", EMAIL)
    store = FakeProviderStore([unrelated])

    result = reconcile([TUTA], store=store)

    assert (result.inserted, result.updated, result.cleaned) == (1, 0, 0)
    assert [p.name for p in store.insert_calls[0]] == ["Tuta"]
    assert store.providers[unrelated.id].source is ProviderSource.DISCOVERED


def test_drifted_catalog_row_is_updated() -> None:
    existing = make_catalog_provider("Fastmail", EMAIL, domain="old.fastmail.com")
    store = FakeProviderStore([existing])

    result = reconcile([FASTMAIL], store=store)

    assert result.updated == 1
    assert store.providers[existing.id].domain == "fastmail.com"
    assert store.update_calls[0][0] == existing.id


def test_rename_is_skipped_when_new_slug_is_taken(caplog: pytest.LogCaptureFixture) -> None:
    renamed = make_catalog_provider("Cloudflare", DNS, slug="cloudflare-dns", age=5)
    squatter = make_provider("cloudflare", DNS, age=1)
    store = FakeProviderStore([renamed, squatter])

    with caplog.at_level(logging.WARNING):
        result = reconcile([CLOUDFLARE], store=store)

    assert (result.inserted, result.updated) == (0, 0)
    assert len(result.warnings) == 1
    assert "conflicts with existing record" in result.warnings[0]
    assert "Skipping update for Cloudflare" in caplog.text
    assert store.providers[renamed.id].slug == "cloudflare-dns"
    assert store.update_calls == []


def test_rename_onto_matched_discovered_row_runs_after_merge() -> None:
    renamed = make_catalog_provider("Cloudflare", DNS, slug="cloudflare-dns", age=5)
    squatter = make_provider("cloudflare", DNS, domain="cloudflare.com", age=1)
    store = FakeProviderStore(
        [renamed, squatter],
        references={"hosting": [{"domain_id": None, "dns_provider_id": squatter.id}]},
    )

    first = reconcile([CLOUDFLARE], store=store)
    second = reconcile([CLOUDFLARE], store=store)

    assert (first.inserted, first.updated, first.cleaned) == (0, 1, 1)
    assert first.warnings == []
    assert (second.inserted, second.updated, second.cleaned) == (0, 0, 0)
    assert second.preview == []
    assert list(store.providers) == [renamed.id]
    assert store.providers[renamed.id].slug == "cloudflare"
    assert store.references["hosting"][0]["dns_provider_id"] == renamed.id


def test_deferred_rename_dry_run_matches_live_run() -> None:
    def providers() -> list[Provider]:
        return [
            make_catalog_provider("Cloudflare", DNS, slug="cloudflare-dns", age=5),
            make_provider("cloudflare", DNS, domain="cloudflare.com", age=1),
        ]

    dry_store = FakeProviderStore(providers())
    live_store = FakeProviderStore(providers())

    dry = reconcile([CLOUDFLARE], store=dry_store, dry_run=True)
    live = reconcile([CLOUDFLARE], store=live_store)

    assert (dry.inserted, dry.updated, dry.cleaned) == (live.inserted, live.updated, live.cleaned)
    assert dry.preview == live.preview
    assert dry.preview[-2].endswith("(after merge)")
    assert dry.preview[-1].startswith("merge discovered dns provider cloudflare")
    assert dry_store.update_calls == []


def test_deferred_rename_keeps_squatter_from_later_replacement() -> None:
    renamed = make_catalog_provider("Cloudflare", DNS, slug="cloudflare-dns", age=5)
    squatter = make_provider("cloudflare", DNS, domain="cloudflare.com", age=1)
    greedy = CatalogDefinition(name="Edge DNS", category=DNS, rule=ns_suffix("cloudflare.com"))

    plan = plan_catalog_sync([CLOUDFLARE, greedy], [renamed, squatter])

    assert [update.provider_id for update in plan.deferred] == [renamed.id]
    assert plan.updates == []
    assert [provider.name for provider in plan.inserts] == ["Edge DNS"]


def test_duplicate_definitions_insert_once(caplog: pytest.LogCaptureFixture) -> None:
    duplicate = CatalogDefinition(name="TUTA", category=EMAIL, domain="tuta.de")
    store = FakeProviderStore()

    with caplog.at_level(logging.WARNING):
        result = reconcile([TUTA, duplicate], store=store)

    assert result.inserted == 1
    assert [p.domain for p in store.providers.values()] == ["tuta.com"]
    assert "Skipping duplicate insert for email/tuta (TUTA)" in caplog.text
    assert result.warnings == ["Skipping duplicate insert for email/tuta (TUTA)"]


def test_same_name_in_different_categories_is_not_a_duplicate() -> None:
    store = FakeProviderStore()
    vercel_dns = CatalogDefinition(name="Vercel", category=DNS, rule=ns_suffix("vercel-dns.com"))

    result = reconcile([vercel_dns, VERCEL], store=store)

    assert result.inserted == 2
    assert sorted(_keys(list(store.providers.values()))) == [(DNS, "vercel"), (HOSTING, "vercel")]


def test_discovered_provider_is_claimed_by_first_matching_definition_only() -> None:
    google = CatalogDefinition(name="Google Mail", category=EMAIL, rule=mx_suffix("google.com"))
    workspace = CatalogDefinition(
        name="Google Workspace",
        category=EMAIL,
        rule=mx_suffix("aspmx.l.google.com"),
    )
    discovered = make_provider("aspmx.l.google.com", EMAIL)
    store = FakeProviderStore([discovered])

    result = reconcile([google, workspace], store=store)

    assert (result.inserted, result.updated) == (1, 1)
    assert store.providers[discovered.id].name == "Google Mail"


def test_discovered_hosting_providers_are_left_alone() -> None:
    discovered = make_provider("Vercel Inc", HOSTING, domain="vercel.com")
    store = FakeProviderStore([discovered])

    result = reconcile([VERCEL], store=store)

    assert (result.inserted, result.updated, result.cleaned) == (1, 0, 0)
    assert store.providers[discovered.id].source is ProviderSource.DISCOVERED


def test_merge_repoints_every_reference_column() -> None:
    catalog_row = make_catalog_provider("Fastmail", EMAIL, domain="fastmail.com", age=10)
    discovered = make_provider("in1-smtp.messagingengine.com", EMAIL, age=1)
    store = FakeProviderStore(
        [catalog_row, discovered],
        references={
            "registrations": [
                {"registrar_provider_id": discovered.id, "reseller_provider_id": discovered.id}
            ],
            "certificates": [{"ca_provider_id": discovered.id}],
            "hosting": [
                {
                    "hosting_provider_id": None,
                    "email_provider_id": discovered.id,
                    "dns_provider_id": discovered.id,
                }
            ],
        },
    )

    result = reconcile([FASTMAIL], store=store)

    assert result.cleaned == 1
    assert result.repointed == 5
    assert discovered.id not in store.providers
    assert not store.is_referenced(discovered.id)
    assert store.references["hosting"][0]["hosting_provider_id"] is None
    assert store.transactions == 1


def test_failed_merge_rolls_back_and_aborts(caplog: pytest.LogCaptureFixture) -> None:
    catalog_row = make_catalog_provider("Fastmail", EMAIL, domain="fastmail.com", age=10)
    discovered = make_provider("in1-smtp.messagingengine.com", EMAIL, age=2)
    also_discovered = make_provider("in2-smtp.messagingengine.com", EMAIL, age=1)
    store = FakeProviderStore(
        [catalog_row, discovered, also_discovered],
        references={
            "registrations": [{"registrar_provider_id": discovered.id}],
            "hosting": [{"email_provider_id": discovered.id}],
        },
    )
    store.fail_on_table = "hosting"

    with caplog.at_level(logging.ERROR), pytest.raises(ProviderMergeError) as excinfo:
        reconcile([FASTMAIL], store=store)

    assert isinstance(excinfo.value.__cause__, InjectedFailure)
    assert excinfo.value.merge.discovered_id == discovered.id
    assert excinfo.value.merge.catalog_id == catalog_row.id
    assert "in1-smtp.messagingengine.com" in str(excinfo.value)
    assert "Failed to merge discovered provider" in caplog.text
    assert discovered.id in store.providers
    assert also_discovered.id in store.providers
    assert store.references["registrations"][0]["registrar_provider_id"] == discovered.id
    assert store.transactions == 1


def test_failed_delete_keeps_references_on_discovered_row() -> None:
    catalog_row = make_catalog_provider("Fastmail", EMAIL, age=10)
    discovered = make_provider("mx.fastmail.com", EMAIL, age=1)
    store = FakeProviderStore(
        [catalog_row, discovered],
        references={"certificates": [{"ca_provider_id": discovered.id}]},
    )
    store.fail_on_delete = True

    with pytest.raises(ProviderMergeError):
        reconcile([FASTMAIL], store=store)

    assert store.references["certificates"][0]["ca_provider_id"] == discovered.id
    assert discovered.id in store.providers


def _scenario() -> list[Provider]:
    return [
        make_catalog_provider("Fastmail", EMAIL, domain="old.fastmail.com", age=20),
        make_provider("in1-smtp.messagingengine.com", EMAIL, age=15),
        make_provider("mail.tutanota.de", EMAIL, age=10),
        make_provider("mx.tuta.com", EMAIL, age=5),
        make_provider("ns1.example.net", DNS, age=1),
    ]


def test_dry_run_reports_same_counts_without_writing() -> None:
    dry_store = FakeProviderStore(_scenario())
    live_store = FakeProviderStore(_scenario())
    definitions = [CLOUDFLARE, FASTMAIL, TUTA]

    dry = reconcile(definitions, store=dry_store, dry_run=True)
    live = reconcile(definitions, store=live_store)

    assert dry.dry_run is True
    assert (dry.inserted, dry.updated, dry.cleaned) == (live.inserted, live.updated, live.cleaned)
    assert (live.inserted, live.updated, live.cleaned) == (1, 2, 2)
    assert dry_store.insert_calls == []
    assert dry_store.update_calls == []
    assert dry_store.transactions == 0
    assert len(dry_store.providers) == len(_scenario())
    assert any(line.startswith("merge discovered") for line in dry.preview)
    assert dry.preview == live.preview
    assert dry.summary().startswith("[dry-run] ")


def test_keys_stay_unique_after_reconciliation() -> None:
    store = FakeProviderStore(_scenario())

    ProviderReconciler(store).reconcile(DEFAULT_CATALOG.definitions())

    keys = _keys(store.list_all())
    assert len(keys) == len(set(keys))


def test_plan_is_pure() -> None:
    discovered = make_provider("mail.tutanota.de", EMAIL)

    plan = plan_catalog_sync([TUTA, FASTMAIL], [discovered])

    assert [update.provider_id for update in plan.replacements] == [discovered.id]
    assert [provider.name for provider in plan.inserts] == ["Fastmail"]
    assert discovered.name == "mail.tutanota.de"
    assert discovered.source is ProviderSource.DISCOVERED
