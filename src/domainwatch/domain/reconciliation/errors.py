"""Errors raised by the reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .plan import MergePlan


class ProviderMergeError(RuntimeError):
    """A discovered provider could not be merged into its catalog provider.

    The merge transaction was rolled back; the original storage error is
    chained as ``__cause__``.
    """

    def __init__(self, merge: MergePlan) -> None:
        self.merge = merge
        super().__init__(
            f"Failed to merge discovered provider {merge.discovered_name} "
            f"({merge.discovered_id}) into {merge.catalog_name} ({merge.catalog_id})"
        )
