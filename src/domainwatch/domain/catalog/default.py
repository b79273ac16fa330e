"""Built-in provider catalog.

A deliberately small set of well-known providers per category. Deployments
that track more providers point ``DOMAINWATCH_CATALOG_PATH`` or
``DOMAINWATCH_CATALOG_URL`` at a full catalog document instead.
"""

from __future__ import annotations

from typing import Final

from domainwatch.domain.detection import (
    any_of,
    header_equals,
    header_present,
    issuer_equals,
    issuer_includes,
    mx_regex,
    mx_suffix,
    ns_regex,
    ns_suffix,
    registrar_includes,
)
from domainwatch.domain.model import ProviderCategory

from .definitions import CatalogDefinition, ProviderCatalog, build_catalog

DEFAULT_CATALOG_VERSION: Final[int] = 1

_CA = ProviderCategory.CA
_DNS = ProviderCategory.DNS
_EMAIL = ProviderCategory.EMAIL
_HOSTING = ProviderCategory.HOSTING
_REGISTRAR = ProviderCategory.REGISTRAR

_DEFINITIONS: Final[tuple[CatalogDefinition, ...]] = (
    CatalogDefinition(
        name="Let's Encrypt",
        domain="letsencrypt.org",
        category=_CA,
        rule=any_of(
            issuer_includes("let's encrypt"),
            issuer_includes("lets encrypt"),
            issuer_includes("isrg"),
            issuer_equals("r3"),
            issuer_equals("r10"),
            issuer_equals("r11"),
            issuer_equals("e1"),
            issuer_equals("e5"),
            issuer_equals("e6"),
        ),
    ),
    CatalogDefinition(
        name="DigiCert",
        domain="digicert.com",
        category=_CA,
        rule=issuer_includes("digicert"),
    ),
    CatalogDefinition(
        name="Sectigo",
        domain="sectigo.com",
        category=_CA,
        rule=any_of(issuer_includes("sectigo"), issuer_includes("comodo")),
    ),
    CatalogDefinition(
        name="GlobalSign",
        domain="globalsign.com",
        category=_CA,
        rule=issuer_includes("globalsign"),
    ),
    CatalogDefinition(
        name="GoDaddy",
        domain="godaddy.com",
        category=_CA,
        rule=any_of(
            issuer_includes("godaddy"),
            issuer_includes("go daddy"),
            issuer_includes("starfield"),
        ),
    ),
    CatalogDefinition(
        name="Cloudflare",
        domain="cloudflare.com",
        category=_DNS,
        rule=ns_suffix("cloudflare.com"),
    ),
    CatalogDefinition(
        name="Amazon Route 53",
        domain="aws.amazon.com",
        category=_DNS,
        rule=any_of(
            ns_regex(r"^ns-\d+\.awsdns-\d+\.(com|net|org|co\.uk)$", "i"),
            ns_regex(r"^ns\d+\.amzndns\.(com|net|org|co\.uk)$", "i"),
        ),
    ),
    CatalogDefinition(
        name="Google Cloud DNS",
        domain="cloud.google.com",
        category=_DNS,
        rule=ns_suffix("googledomains.com"),
    ),
    CatalogDefinition(
        name="Vercel",
        domain="vercel.com",
        category=_DNS,
        rule=ns_suffix("vercel-dns.com"),
    ),
    CatalogDefinition(
        name="DNSimple",
        domain="dnsimple.com",
        category=_DNS,
        rule=ns_suffix("dnsimple.com"),
    ),
    CatalogDefinition(
        name="Google Workspace",
        domain="google.com",
        category=_EMAIL,
        rule=any_of(
            mx_suffix("smtp.google.com"),
            mx_suffix("aspmx.l.google.com"),
            mx_suffix("googlemail.com"),
            mx_regex(r"^alt\d+\.aspmx\.l\.google\.com$"),
            mx_regex(r"^aspmx\d*\.googlemail\.com$", "i"),
        ),
    ),
    CatalogDefinition(
        name="Microsoft 365",
        domain="microsoft.com",
        category=_EMAIL,
        rule=any_of(mx_suffix("mail.protection.outlook.com"), mx_suffix("outlook.com")),
    ),
    CatalogDefinition(
        name="Fastmail",
        domain="fastmail.com",
        category=_EMAIL,
        rule=any_of(mx_suffix("fastmail.com"), mx_suffix("messagingengine.com")),
    ),
    CatalogDefinition(
        name="Proton Mail",
        domain="proton.me",
        category=_EMAIL,
        rule=any_of(mx_suffix("protonmail.ch"), mx_suffix("proton.me")),
    ),
    CatalogDefinition(
        name="Zoho Mail",
        domain="zoho.com",
        category=_EMAIL,
        rule=mx_suffix("zoho.com"),
    ),
    CatalogDefinition(
        name="Tuta",
        domain="tuta.com",
        category=_EMAIL,
        rule=any_of(mx_suffix("tutanota.de"), mx_suffix("tuta.com")),
    ),
    CatalogDefinition(
        name="Vercel",
        domain="vercel.com",
        category=_HOSTING,
        rule=any_of(header_equals("server", "vercel"), header_present("x-vercel-id")),
    ),
    CatalogDefinition(
        name="Cloudflare",
        domain="cloudflare.com",
        category=_HOSTING,
        rule=any_of(header_equals("server", "cloudflare"), header_present("cf-ray")),
    ),
    CatalogDefinition(
        name="Netlify",
        domain="netlify.com",
        category=_HOSTING,
        rule=any_of(header_equals("server", "netlify"), header_present("x-nf-request-id")),
    ),
    CatalogDefinition(
        name="AWS CloudFront",
        domain="aws.amazon.com",
        category=_HOSTING,
        rule=any_of(
            header_equals("server", "cloudfront"),
            header_present("x-amz-cf-id"),
            header_present("x-amz-cf-pop"),
        ),
    ),
    CatalogDefinition(
        name="Fastly",
        domain="fastly.com",
        category=_HOSTING,
        rule=any_of(header_present("x-served-by"), header_present("x-fastly-request-id")),
    ),
    CatalogDefinition(
        name="GoDaddy",
        domain="godaddy.com",
        category=_REGISTRAR,
        rule=any_of(
            registrar_includes("godaddy"),
            registrar_includes("go daddy"),
            registrar_includes("wild west domains"),
        ),
    ),
    CatalogDefinition(
        name="Namecheap",
        domain="namecheap.com",
        category=_REGISTRAR,
        rule=registrar_includes("namecheap"),
    ),
    CatalogDefinition(
        name="Cloudflare Registrar",
        domain="cloudflare.com",
        category=_REGISTRAR,
        rule=registrar_includes("cloudflare"),
    ),
    CatalogDefinition(
        name="Google Domains",
        domain="domains.google",
        category=_REGISTRAR,
        rule=any_of(registrar_includes("google domains"), registrar_includes("google llc")),
    ),
    CatalogDefinition(
        name="Amazon Registrar",
        domain="aws.amazon.com",
        category=_REGISTRAR,
        rule=any_of(registrar_includes("amazon registrar"), registrar_includes("amazon.com")),
    ),
)

DEFAULT_CATALOG: Final[ProviderCatalog] = build_catalog(DEFAULT_CATALOG_VERSION, _DEFINITIONS)


def get_default_catalog() -> ProviderCatalog:
    return DEFAULT_CATALOG
