"""Rule-based provider detection primitives."""

from __future__ import annotations

from .context import DetectionContext, normalize_host
from .evaluate import RuleEvaluationError, compile_pattern, evaluate_rule
from .rules import (
    AllOf,
    AnyOf,
    Leaf,
    MatchMode,
    Not,
    Rule,
    SignalField,
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

__all__ = [
    "AllOf",
    "AnyOf",
    "DetectionContext",
    "Leaf",
    "MatchMode",
    "Not",
    "Rule",
    "RuleEvaluationError",
    "SignalField",
    "all_of",
    "any_of",
    "compile_pattern",
    "evaluate_rule",
    "header_equals",
    "header_includes",
    "header_present",
    "issuer_equals",
    "issuer_includes",
    "mx_regex",
    "mx_suffix",
    "normalize_host",
    "not_",
    "ns_regex",
    "ns_suffix",
    "registrar_equals",
    "registrar_includes",
]
