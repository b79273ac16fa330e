"""Observed signals a rule is evaluated against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def normalize_host(host: str) -> str:
    """Lower-case a DNS host name and drop the trailing root dot."""

    return host.strip().lower().removesuffix(".")


@dataclass(frozen=True, slots=True, kw_only=True)
class DetectionContext:
    """Per-evaluation bag of signals; every field may be empty."""

    nameservers: tuple[str, ...] = ()
    mail_exchangers: tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict[str, str])
    issuer: str | None = None
    registrar: str | None = None

    @classmethod
    def build(
        cls,
        *,
        nameservers: Iterable[str] = (),
        mail_exchangers: Iterable[str] = (),
        headers: Mapping[str, str] | None = None,
        issuer: str | None = None,
        registrar: str | None = None,
    ) -> DetectionContext:
        """Construct a context with hosts, header names and values normalised."""

        return cls(
            nameservers=tuple(normalize_host(host) for host in nameservers if host),
            mail_exchangers=tuple(normalize_host(host) for host in mail_exchangers if host),
            headers={
                name.lower(): value.strip().lower() for name, value in (headers or {}).items()
            },
            issuer=issuer.lower() if issuer else None,
            registrar=registrar.lower() if registrar else None,
        )
