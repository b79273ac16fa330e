"""Domain model for provider reconciliation."""

from __future__ import annotations

from .enums import ProviderCategory, ProviderSource
from .provider import Provider, ProviderFields, ProviderKey, new_id, utcnow

__all__ = [
    "Provider",
    "ProviderCategory",
    "ProviderFields",
    "ProviderKey",
    "ProviderSource",
    "new_id",
    "utcnow",
]
