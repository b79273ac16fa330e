"""Keep the provider table consistent with the provider catalog."""

from __future__ import annotations

from .engine import ProviderReconciler, plan_catalog_sync, plan_merges, project, reconcile
from .errors import ProviderMergeError
from .index import ProviderIndex
from .matcher import build_detection_context, matches
from .plan import MergePlan, PlannedUpdate, ReconcileResult, SyncPlan
from .references import PROVIDER_REFERENCES, PROVIDERS_TABLE, ReferenceColumn, columns_by_table

__all__ = [
    "PROVIDERS_TABLE",
    "PROVIDER_REFERENCES",
    "MergePlan",
    "PlannedUpdate",
    "ProviderIndex",
    "ProviderMergeError",
    "ProviderReconciler",
    "ReconcileResult",
    "ReferenceColumn",
    "SyncPlan",
    "build_detection_context",
    "columns_by_table",
    "matches",
    "plan_catalog_sync",
    "plan_merges",
    "project",
    "reconcile",
]
