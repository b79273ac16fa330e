"""Slug normalisation for provider names."""

from __future__ import annotations

import re
import unicodedata

_APOSTROPHES = re.compile(r"['’`]")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Return the URL-safe slug for ``name``.

    >>> slugify("Let's Encrypt")
    'lets-encrypt'
    >>> slugify("Amazon Route 53")
    'amazon-route-53'
    """

    decomposed = unicodedata.normalize("NFKD", name)
    ascii_only = "".join(char for char in decomposed if not unicodedata.combining(char))
    lowered = _APOSTROPHES.sub("", ascii_only.lower())
    return _NON_ALPHANUMERIC.sub("-", lowered).strip("-")
