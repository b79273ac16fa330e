"""Rule evaluation against a detection context."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from .context import normalize_host
from .rules import AllOf, AnyOf, Leaf, MatchMode, Not, SignalField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .context import DetectionContext
    from .rules import Rule


class RuleEvaluationError(ValueError):
    """Raised when a rule is malformed and cannot be evaluated."""


_REGEX_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}
# JavaScript-style flags that have no effect on a single search
_IGNORED_REGEX_FLAGS = frozenset("gu")


def compile_pattern(pattern: str, flags: str | None = None) -> re.Pattern[str]:
    """Compile a catalog regex; omitted flags mean case-insensitive."""

    return _compile_pattern(pattern, "i" if flags is None else flags)


@lru_cache(maxsize=512)
def _compile_pattern(pattern: str, flags: str) -> re.Pattern[str]:
    compiled_flags = re.NOFLAG
    for flag in flags:
        if flag in _IGNORED_REGEX_FLAGS:
            continue
        if flag not in _REGEX_FLAGS:
            raise RuleEvaluationError(f"Unsupported regex flag {flag!r} in /{pattern}/{flags}")
        compiled_flags |= _REGEX_FLAGS[flag]
    try:
        return re.compile(pattern, compiled_flags)
    except re.error as exc:
        raise RuleEvaluationError(f"Invalid regex pattern {pattern!r}: {exc}") from exc


def evaluate_rule(rule: Rule, context: DetectionContext) -> bool:
    """Return whether ``rule`` matches ``context``.

    Compound nodes short-circuit. Leaves over absent signals are ``False``.
    Raises ``RuleEvaluationError`` for malformed rules.
    """

    match rule:
        case AllOf(children=children):
            return all(evaluate_rule(child, context) for child in children)
        case AnyOf(children=children):
            return any(evaluate_rule(child, context) for child in children)
        case Not(child=child):
            return not evaluate_rule(child, context)
        case Leaf():
            return _evaluate_leaf(rule, context)
        case _:
            raise RuleEvaluationError(f"Unknown rule node: {rule!r}")


def _evaluate_leaf(leaf: Leaf, context: DetectionContext) -> bool:
    match leaf.field:
        case SignalField.HEADER:
            return _evaluate_header(leaf, context)
        case SignalField.MAIL_EXCHANGER:
            return _evaluate_hosts(leaf, context.mail_exchangers)
        case SignalField.NAMESERVER:
            return _evaluate_hosts(leaf, context.nameservers)
        case SignalField.ISSUER:
            return _evaluate_text(leaf, context.issuer)
        case SignalField.REGISTRAR:
            return _evaluate_text(leaf, context.registrar)
        case _:
            raise RuleEvaluationError(f"Unknown signal field: {leaf.field!r}")


def _evaluate_header(leaf: Leaf, context: DetectionContext) -> bool:
    if not leaf.header:
        raise RuleEvaluationError(f"Header rule without a header name: {leaf!r}")
    name = leaf.header.lower()
    if leaf.mode == MatchMode.PRESENT:
        return name in context.headers
    value = context.headers.get(name)
    if value is None:
        return False
    value = value.lower()
    match leaf.mode:
        case MatchMode.EQUALS:
            return value == leaf.value.lower()
        case MatchMode.INCLUDES:
            return leaf.value.lower() in value
        case _:
            raise RuleEvaluationError(f"Unsupported match mode for headers: {leaf.mode!r}")


def _evaluate_hosts(leaf: Leaf, hosts: Iterable[str]) -> bool:
    match leaf.mode:
        case MatchMode.SUFFIX:
            suffix = normalize_host(leaf.value)
            return any(_host_has_suffix(normalize_host(host), suffix) for host in hosts)
        case MatchMode.REGEX:
            pattern = compile_pattern(leaf.value, leaf.flags)
            return any(pattern.search(normalize_host(host)) for host in hosts)
        case _:
            raise RuleEvaluationError(f"Unsupported match mode for hosts: {leaf.mode!r}")


def _host_has_suffix(host: str, suffix: str) -> bool:
    return host == suffix or host.endswith(f".{suffix}")


def _evaluate_text(leaf: Leaf, text: str | None) -> bool:
    if not text:
        return False
    match leaf.mode:
        case MatchMode.EQUALS:
            return text.lower() == leaf.value.lower()
        case MatchMode.INCLUDES:
            return leaf.value.lower() in text.lower()
        case _:
            raise RuleEvaluationError(f"Unsupported match mode for {leaf.field}: {leaf.mode!r}")
