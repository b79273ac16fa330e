"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProviderCategory(StrEnum):
    """Function a provider performs for a monitored domain."""

    HOSTING = "hosting"
    EMAIL = "email"
    DNS = "dns"
    CA = "ca"
    REGISTRAR = "registrar"


class ProviderSource(StrEnum):
    """How a provider row came to exist."""

    CATALOG = "catalog"
    DISCOVERED = "discovered"
