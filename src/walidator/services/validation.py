"""ValidationService — rule checks and document validation for the CLI.

Builds the rule registry from three sources, in order: the built-ins,
``[patterns]`` declared in ``walidator.toml``, and rules contributed by
plugins. Every operation returns a :class:`ServiceResult`.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from walidator.domain.patterns import pattern_rule
from walidator.domain.registry import RuleRegistry
from walidator.domain.walker import Validator
from walidator.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from walidator.config.settings import WalidatorSettings
    from walidator.domain.errors import RuleError
    from walidator.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_path(data: Any, path: str) -> Any:
    """Follow a dotted *path* into nested mappings and lists.

    Missing keys and out-of-range indexes resolve to ``None``, so the
    ``required`` rule decides what absence means.

    Examples:
        >>> resolve_path({"origin": {"lat": 1.5}}, "origin.lat")
        1.5
        >>> resolve_path({"stops": [{"lat": 2}]}, "stops.0.lat")
        2
        >>> resolve_path({}, "origin.lat") is None
        True
    """
    current = data
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            current = _MISSING
        if current is _MISSING:
            return None
    return current


def _error_payload(error: RuleError) -> dict[str, Any]:
    return {"kind": str(error.kind), "message": error.message}


class ValidationService:
    """Run rules through a :class:`Validator` and report ServiceResults."""

    def __init__(
        self,
        validator: Validator | None = None,
        *,
        fields: Mapping[str, str] | None = None,
        warnings: list[str] | None = None,
    ) -> None:
        self._validator = validator or Validator()
        self._fields = dict(fields or {})
        self._warnings = list(warnings or [])

    @property
    def validator(self) -> Validator:
        return self._validator

    @classmethod
    def from_settings(
        cls,
        settings: WalidatorSettings,
        plugins: PluginManager | None = None,
    ) -> ValidationService:
        """Build the service from settings, config patterns, and plugins.

        Invalid pattern declarations become warnings rather than failures.
        """
        warnings: list[str] = []
        registry = RuleRegistry.default()

        pattern_rules = {}
        for name, pattern in settings.patterns.items():
            try:
                pattern_rules[name] = pattern_rule(pattern, name=name)
            except re.error as exc:
                warnings.append(f"Skipping pattern rule {name!r}: {exc}")
        for name, rule in pattern_rules.items():
            try:
                registry = registry.extend({name: rule})
            except (TypeError, ValueError) as exc:
                warnings.append(f"Skipping pattern rule {name!r}: {exc}")

        if plugins is not None and settings.plugins.enabled:
            registry = plugins.extend_registry(registry)

        logger.debug("Rule registry ready: %s", registry.names())
        validator = Validator(registry, tag_name=settings.validator.tag_name)
        return cls(validator, fields=settings.fields, warnings=warnings)

    def list_rules(self) -> ServiceResult:
        """List every registered rule with its first docstring line."""
        registry = self._validator.registry
        rules = []
        for name in registry.names():
            doc = (registry[name].__doc__ or "").strip().splitlines()
            rules.append(
                {
                    "name": name,
                    "builtin": registry.is_builtin(name),
                    "description": doc[0] if doc else "",
                }
            )
        return ServiceResult.success("rules", {"count": len(rules), "rules": rules}, self._warnings)

    def check(self, rule: str, value: Any, param: str = "") -> ServiceResult:
        """Evaluate one rule against one value."""
        registry = self._validator.registry
        if rule not in registry:
            return ServiceResult.failure(
                "check",
                "UNKNOWN_RULE",
                f"No rule named {rule!r}",
                detail={"available": registry.names()},
                warnings=self._warnings,
            )

        error = registry[rule](value, param)
        logger.debug("check %s(%r, %r) -> %s", rule, value, param, error.kind if error else "ok")
        if error is None:
            return ServiceResult.success(
                "check",
                {"rule": rule, "value": value, "param": param, "valid": True},
                self._warnings,
            )
        code: ErrorCode = "VALIDATION_FAILED" if error.is_violation else "RULE_NOT_APPLICABLE"
        return ServiceResult.failure(
            "check",
            code,
            f"{rule}: {error.message}",
            detail={"rule": rule, "param": param, **_error_payload(error)},
            warnings=self._warnings,
        )

    def validate_data(self, data: Any, rules: Mapping[str, str] | None = None) -> ServiceResult:
        """Validate fields of a decoded document.

        *rules* maps dotted field paths to tag strings. Config ``[fields]``
        rules apply first; *rules* override them path by path.
        """
        merged = {**self._fields, **(rules or {})}
        if not merged:
            return ServiceResult.failure("validate", "INVALID_INPUT", "No field rules given", warnings=self._warnings)

        failures: dict[str, list[dict[str, Any]]] = {}
        for path, tags in merged.items():
            errors = self._validator.valid(resolve_path(data, path), tags)
            if errors:
                failures[path] = [_error_payload(e) for e in errors]

        logger.debug("validate: %d field(s), %d failing", len(merged), len(failures))
        if failures:
            return ServiceResult.failure(
                "validate",
                "VALIDATION_FAILED",
                f"{len(failures)} of {len(merged)} field(s) failed validation",
                detail={"fields": failures},
                warnings=self._warnings,
            )
        return ServiceResult.success("validate", {"checked": sorted(merged), "count": len(merged)}, self._warnings)

    def validate_document(self, path: Path, rules: Mapping[str, str] | None = None) -> ServiceResult:
        """Load a JSON document from *path* and validate it."""
        if not path.is_file():
            return ServiceResult.failure("validate", "FILE_NOT_FOUND", f"No such file: {path}", warnings=self._warnings)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                "validate", "INVALID_INPUT", f"Cannot decode {path}: {exc}", warnings=self._warnings
            )
        return self.validate_data(data, rules)
