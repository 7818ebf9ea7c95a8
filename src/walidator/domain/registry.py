"""Rule registry — name -> rule lookup used by the tag driver.

A registry never changes after construction. ``extend`` returns a new
registry, so one instance can be shared freely across threads.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from walidator.domain.bounds import len_, max_, min_
from walidator.domain.errors import RuleError
from walidator.domain.geo import latitude, longitude
from walidator.domain.patterns import regexp, uuid
from walidator.domain.presence import nonzero, required

Rule = Callable[[Any, str], RuleError | None]

BUILTIN_RULES: Mapping[str, Rule] = MappingProxyType(
    {
        "required": required,
        "nonzero": nonzero,
        "len": len_,
        "min": min_,
        "max": max_,
        "regexp": regexp,
        "uuid": uuid,
        "latitude": latitude,
        "longitude": longitude,
    }
)

_FORBIDDEN_NAME_CHARS = frozenset(",=\\")


def check_rule_name(name: str) -> str:
    """Return *name* stripped, or raise ``ValueError`` if it cannot appear in a tag."""
    normalized = name.strip()
    if not normalized:
        msg = "Rule name must not be empty"
        raise ValueError(msg)
    if any(c in _FORBIDDEN_NAME_CHARS or c.isspace() for c in normalized):
        msg = f"Rule name {normalized!r} contains characters reserved by the tag grammar"
        raise ValueError(msg)
    return normalized


class RuleRegistry(Mapping[str, Rule]):
    """Immutable mapping of rule name to rule."""

    def __init__(self, rules: Mapping[str, Rule] | None = None) -> None:
        self._rules: Mapping[str, Rule] = MappingProxyType(dict(BUILTIN_RULES if rules is None else rules))

    @classmethod
    def default(cls) -> RuleRegistry:
        return _DEFAULT

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def names(self) -> list[str]:
        return sorted(self._rules)

    def is_builtin(self, name: str) -> bool:
        return name in BUILTIN_RULES and self._rules.get(name) is BUILTIN_RULES[name]

    def extend(self, rules: Mapping[str, Rule]) -> RuleRegistry:
        """Return a new registry with *rules* added.

        Built-in names are reserved. Re-registering the same callable
        under the same name is a no-op.

        Raises:
            ValueError: On an invalid name or a conflicting registration.
            TypeError: If a rule is not callable.
        """
        merged = dict(self._rules)
        for name, rule in rules.items():
            normalized = check_rule_name(name)
            if not callable(rule):
                msg = f"Rule {normalized!r} must be callable, got {type(rule).__name__}"
                raise TypeError(msg)
            existing = merged.get(normalized)
            if existing is rule:
                continue
            if normalized in BUILTIN_RULES:
                msg = f"Rule {normalized!r} conflicts with a built-in rule"
                raise ValueError(msg)
            if existing is not None:
                msg = f"Rule {normalized!r} is already registered"
                raise ValueError(msg)
            merged[normalized] = rule
        return RuleRegistry(merged)

    def __repr__(self) -> str:
        return f"RuleRegistry({self.names()!r})"


_DEFAULT = RuleRegistry()
