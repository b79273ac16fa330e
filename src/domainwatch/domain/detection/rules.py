"""Declarative detection rules.

A rule is either a leaf predicate over one signal field or a compound node
combining sub-rules. Rules are immutable and live in catalog data; they are
never persisted on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SignalField(StrEnum):
    """Signal a leaf predicate inspects."""

    HEADER = "header"
    MAIL_EXCHANGER = "mx"
    NAMESERVER = "ns"
    ISSUER = "issuer"
    REGISTRAR = "registrar"


class MatchMode(StrEnum):
    EQUALS = "equals"
    INCLUDES = "includes"
    PRESENT = "present"
    SUFFIX = "suffix"
    REGEX = "regex"


@dataclass(frozen=True, slots=True, kw_only=True)
class Leaf:
    """Predicate over a single signal field.

    ``header`` names the header for header predicates. ``flags`` only applies to
    regex predicates; ``None`` means case-insensitive, ``""`` case-sensitive.
    """

    field: SignalField
    mode: MatchMode
    value: str = ""
    header: str | None = None
    flags: str | None = None


@dataclass(frozen=True, slots=True)
class AllOf:
    children: tuple[Rule, ...]


@dataclass(frozen=True, slots=True)
class AnyOf:
    children: tuple[Rule, ...]


@dataclass(frozen=True, slots=True)
class Not:
    child: Rule


type Rule = Leaf | AllOf | AnyOf | Not


def all_of(*children: Rule) -> AllOf:
    return AllOf(children)


def any_of(*children: Rule) -> AnyOf:
    return AnyOf(children)


def not_(child: Rule) -> Not:
    return Not(child)


def header_equals(name: str, value: str) -> Leaf:
    return Leaf(field=SignalField.HEADER, mode=MatchMode.EQUALS, header=name, value=value)


def header_includes(name: str, substr: str) -> Leaf:
    return Leaf(field=SignalField.HEADER, mode=MatchMode.INCLUDES, header=name, value=substr)


def header_present(name: str) -> Leaf:
    return Leaf(field=SignalField.HEADER, mode=MatchMode.PRESENT, header=name)


def mx_suffix(suffix: str) -> Leaf:
    return Leaf(field=SignalField.MAIL_EXCHANGER, mode=MatchMode.SUFFIX, value=suffix)


def mx_regex(pattern: str, flags: str | None = None) -> Leaf:
    return Leaf(
        field=SignalField.MAIL_EXCHANGER, mode=MatchMode.REGEX, value=pattern, flags=flags
    )


def ns_suffix(suffix: str) -> Leaf:
    return Leaf(field=SignalField.NAMESERVER, mode=MatchMode.SUFFIX, value=suffix)


def ns_regex(pattern: str, flags: str | None = None) -> Leaf:
    return Leaf(field=SignalField.NAMESERVER, mode=MatchMode.REGEX, value=pattern, flags=flags)


def issuer_equals(value: str) -> Leaf:
    return Leaf(field=SignalField.ISSUER, mode=MatchMode.EQUALS, value=value)


def issuer_includes(substr: str) -> Leaf:
    return Leaf(field=SignalField.ISSUER, mode=MatchMode.INCLUDES, value=substr)


def registrar_equals(value: str) -> Leaf:
    return Leaf(field=SignalField.REGISTRAR, mode=MatchMode.EQUALS, value=value)


def registrar_includes(substr: str) -> Leaf:
    return Leaf(field=SignalField.REGISTRAR, mode=MatchMode.INCLUDES, value=substr)
