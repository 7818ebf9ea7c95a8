"""Geographic coordinate rules: ``latitude`` and ``longitude``.

Both accept a number or a numeric string. ``None`` skips the check:
whether the field must be set is the business of ``required``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from walidator.domain.errors import RuleError, text_error, unsupported_error
from walidator.domain.shapes import Shape, classify

LATITUDE_BOUNDS = (-90.0, 90.0)
LONGITUDE_BOUNDS = (-180.0, 180.0)

# ASCII decimal, exponent, inf or nan. No digit separators, no non-ASCII digits.
_DECIMAL_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?|nan)",
    re.ASCII | re.IGNORECASE,
)


def parse_decimal(text: str) -> float | None:
    """Parse *text* as a plain decimal number, or return ``None``.

    Surrounding whitespace is ignored, as with ``float()``.

    Examples:
        >>> parse_decimal("-12.5e1")
        -125.0
        >>> parse_decimal("4_5") is None
        True
    """
    stripped = text.strip()
    if not stripped.isascii() or _DECIMAL_RE.fullmatch(stripped) is None:
        return None
    return float(stripped)


def format_number(value: float) -> str:
    """Shortest round-trip text for *value*, without a trailing ``.0``.

    Examples:
        >>> format_number(91.0)
        '91'
        >>> format_number(90.0001)
        '90.0001'
    """
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def check_range(value: float, axis: str, lower: float, upper: float) -> RuleError | None:
    """Inclusive range check shared by both axes."""
    if value < lower or value > upper:
        return text_error(f"{format_number(value)} is not a valid {axis}", axis=axis, value=value)
    return None


def coordinate_rule(axis: str, lower: float, upper: float) -> Callable[[Any, str], RuleError | None]:
    """Build the rule for one coordinate axis."""

    def rule(value: Any, param: str) -> RuleError | None:
        shape = classify(value)
        if shape is Shape.ABSENT:
            return None
        if shape is Shape.NUMBER:
            try:
                number = float(value)
            except (OverflowError, ValueError):
                return text_error(f"{value} is not a valid {axis}", axis=axis)
            return check_range(number, axis, lower, upper)
        if shape is Shape.STRING:
            parsed = parse_decimal(value)
            if parsed is None:
                return text_error(f"{value} is not a valid {axis}", axis=axis, text=value)
            return check_range(parsed, axis, lower, upper)
        return unsupported_error(value)

    rule.__name__ = axis
    rule.__qualname__ = axis
    rule.__doc__ = f"Check that a number or numeric string is a valid {axis} in [{lower:g}, {upper:g}]."
    return rule


latitude = coordinate_rule("latitude", *LATITUDE_BOUNDS)
longitude = coordinate_rule("longitude", *LONGITUDE_BOUNDS)
