"""Foreign-key columns that point at ``providers.id``.

Merging a discovered provider rewrites every column listed here before the
provider row is deleted. A new referencing column is one more entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

PROVIDERS_TABLE: Final[str] = "providers"


@dataclass(frozen=True, slots=True)
class ReferenceColumn:
    table: str
    column: str


PROVIDER_REFERENCES: Final[tuple[ReferenceColumn, ...]] = (
    ReferenceColumn("registrations", "registrar_provider_id"),
    ReferenceColumn("registrations", "reseller_provider_id"),
    ReferenceColumn("certificates", "ca_provider_id"),
    ReferenceColumn("hosting", "hosting_provider_id"),
    ReferenceColumn("hosting", "email_provider_id"),
    ReferenceColumn("hosting", "dns_provider_id"),
)


def columns_by_table(references: Iterable[ReferenceColumn]) -> dict[str, tuple[str, ...]]:
    """Group reference columns by table, keeping declaration order."""

    grouped: dict[str, list[str]] = {}
    for reference in references:
        grouped.setdefault(reference.table, []).append(reference.column)
    return {table: tuple(columns) for table, columns in grouped.items()}
