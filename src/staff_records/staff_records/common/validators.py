from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Pattern


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


@dataclass(frozen=True)
class Rule:
    """One check on one field.

    A failing rule with ``halts=True`` stops evaluation of the remaining rules
    for that field (used for "required" so it wins over format checks).
    """

    field: str
    check: Callable[[Any], bool]
    message: str
    halts: bool = False


def validate(candidate: Any, rules: Iterable[Rule]) -> List[Violation]:
    """Evaluate ``rules`` against ``candidate`` and return violations in rule order.

    Attributes missing on the candidate are treated as absent (None). If the
    candidate exposes ``parse_errors`` (field -> message), a field listed there
    reports that message instead of running its rules.
    """

    parse_errors: Mapping[str, str] = getattr(candidate, "parse_errors", None) or {}
    violations: List[Violation] = []
    halted: set[str] = set()
    reported_parse: set[str] = set()

    for rule in rules:
        if rule.field in halted:
            continue

        if rule.field in parse_errors:
            if rule.field not in reported_parse:
                violations.append(Violation(rule.field, parse_errors[rule.field]))
                reported_parse.add(rule.field)
            continue

        value = getattr(candidate, rule.field, None)
        if rule.check(value):
            continue

        violations.append(Violation(rule.field, rule.message))
        if rule.halts:
            halted.add(rule.field)

    return violations


def group_by_field(violations: Iterable[Violation]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for v in violations:
        out.setdefault(v.field, []).append(v.message)
    return out


# --- predicates ---------------------------------------------------------


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def length_between(min_len: int, max_len: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return value is None or min_len <= len(value) <= max_len

    return check


def max_length(max_len: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return value is None or len(value) <= max_len

    return check


def matches(pattern: str | Pattern[str]) -> Callable[[Any], bool]:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(value: Any) -> bool:
        return value is None or compiled.fullmatch(value) is not None

    return check


def optional(check: Callable[[Any], bool]) -> Callable[[Any], bool]:
    """Wrap ``check`` so an absent value passes."""

    def wrapper(value: Any) -> bool:
        return value is None or check(value)

    return wrapper
