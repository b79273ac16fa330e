"""Retrospective matching of discovered providers against catalog rules.

Live detection sees raw signals (MX hosts, NS hosts, response headers, the
certificate issuer, the registrar name). A discovered provider only keeps the
``name``/``domain`` pair it was created from, so matching rebuilds the one
signal field that category's detection looked at. Hosting detection reads
HTTP response headers, which cannot be rebuilt from a name, so hosting
providers never match retrospectively.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domainwatch.domain.detection import DetectionContext, RuleEvaluationError, evaluate_rule
from domainwatch.domain.model import ProviderCategory

if TYPE_CHECKING:
    from domainwatch.domain.catalog import CatalogDefinition
    from domainwatch.domain.model import Provider

log = logging.getLogger(__name__)


def build_detection_context(
    category: ProviderCategory,
    discovered: Provider,
) -> DetectionContext | None:
    """Rebuild the detection signals a discovered provider was created from.

    Returns ``None`` for categories without a retrospective signal.
    """

    hosts = [discovered.name]
    if discovered.domain:
        hosts.append(discovered.domain)

    match category:
        case ProviderCategory.EMAIL:
            return DetectionContext.build(mail_exchangers=hosts)
        case ProviderCategory.DNS:
            return DetectionContext.build(nameservers=hosts)
        case ProviderCategory.CA:
            return DetectionContext.build(issuer=discovered.name.lower() or None)
        case ProviderCategory.REGISTRAR:
            return DetectionContext.build(registrar=discovered.name.lower() or None)
        case _:
            return None


def matches(definition: CatalogDefinition, discovered: Provider) -> bool:
    """Return whether ``definition``'s rule would have classified ``discovered``."""

    if definition.rule is None or discovered.category != definition.category:
        return False

    context = build_detection_context(definition.category, discovered)
    if context is None:
        return False

    try:
        return evaluate_rule(definition.rule, context)
    except RuleEvaluationError as exc:
        log.warning(
            "Failed to evaluate rule for %s against %s: %s",
            definition.name,
            discovered.name,
            exc,
        )
        return False
    except Exception:  # noqa: BLE001
        log.warning(
            "Unexpected error evaluating rule for %s against %s",
            definition.name,
            discovered.name,
            exc_info=True,
        )
        return False
