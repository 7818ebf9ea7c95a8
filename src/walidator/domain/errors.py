"""Error vocabulary shared by every rule.

A rule never raises for bad data. It returns ``None`` (valid) or a
:class:`RuleError` whose :class:`ErrorKind` tells the caller whether the
value broke the rule or the rule was applied to a value it cannot judge.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(StrEnum):
    """Closed set of outcomes a rule can report."""

    REQUIRED = "required"
    ZERO_VALUE = "zero_value"
    MIN = "min"
    MAX = "max"
    LEN = "len"
    REGEXP = "regexp"
    INVALID = "invalid"
    UNSUPPORTED = "unsupported"
    BAD_PARAMETER = "bad_parameter"
    UNKNOWN_TAG = "unknown_tag"

    @property
    def is_violation(self) -> bool:
        """True when the value was evaluated and failed the rule."""
        return self not in _USAGE_KINDS


_USAGE_KINDS = frozenset({ErrorKind.UNSUPPORTED, ErrorKind.BAD_PARAMETER, ErrorKind.UNKNOWN_TAG})

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.REQUIRED: "required",
    ErrorKind.ZERO_VALUE: "zero value",
    ErrorKind.MIN: "less than min",
    ErrorKind.MAX: "greater than max",
    ErrorKind.LEN: "invalid length",
    ErrorKind.REGEXP: "regular expression mismatch",
    ErrorKind.INVALID: "invalid value",
    ErrorKind.UNSUPPORTED: "unsupported type",
    ErrorKind.BAD_PARAMETER: "bad parameter",
    ErrorKind.UNKNOWN_TAG: "unknown tag",
}


class RuleError(BaseModel):
    """Outcome of a failed rule evaluation."""

    model_config = {"frozen": True}

    kind: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def of(cls, kind: ErrorKind, **detail: Any) -> RuleError:
        """Build an error carrying the default message for *kind*."""
        return cls(kind=kind, message=DEFAULT_MESSAGES[kind], detail=detail)

    @property
    def is_violation(self) -> bool:
        return self.kind.is_violation

    def __str__(self) -> str:
        return self.message


def required_error() -> RuleError:
    return RuleError.of(ErrorKind.REQUIRED)


def unsupported_error(value: Any) -> RuleError:
    return RuleError.of(ErrorKind.UNSUPPORTED, type=type(value).__name__)


def text_error(message: str, **detail: Any) -> RuleError:
    """Value-specific violation whose message is already formatted."""
    return RuleError(kind=ErrorKind.INVALID, message=message, detail=detail)


class TagSyntaxError(ValueError):
    """Raised when a tag string cannot be parsed."""


class ValidationFailed(Exception):
    """Raised by ``Validator.assert_valid`` when any field fails.

    Attributes:
        errors: Field path -> errors reported for that field, in rule order.
    """

    def __init__(self, errors: dict[str, list[RuleError]]) -> None:
        self.errors = errors
        super().__init__(self._render())

    def _render(self) -> str:
        lines = []
        for path, errs in self.errors.items():
            joined = ", ".join(str(e) for e in errs)
            lines.append(f"{path or '<value>'}: {joined}")
        return "\n".join(lines)
