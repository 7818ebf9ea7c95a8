"""Presence rules: ``required`` and ``nonzero``.

``required`` is structural. It asks whether a value exists, not whether it
holds something other than its default. ``""``, ``0``, ``False`` and empty
collections all satisfy it. Use ``nonzero`` for the content check.
"""

from __future__ import annotations

from typing import Any

from walidator.domain.errors import ErrorKind, RuleError, required_error, unsupported_error
from walidator.domain.shapes import COLLECTION_SHAPES, Shape, classify

_PRESENT_SHAPES = frozenset(
    {
        Shape.BOOLEAN,
        Shape.NUMBER,
        Shape.STRING,
        Shape.BYTES,
        Shape.SEQUENCE,
        Shape.MAPPING,
        Shape.SET,
        Shape.RECORD,
    }
)


def required(value: Any, param: str) -> RuleError | None:
    """Fail with REQUIRED when *value* is ``None``.

    Unsupported shapes (functions, generators, ...) report UNSUPPORTED
    so a misattached rule is never mistaken for missing data.
    """
    shape = classify(value)
    if shape is Shape.ABSENT:
        return required_error()
    if shape in _PRESENT_SHAPES:
        return None
    return unsupported_error(value)


def nonzero(value: Any, param: str) -> RuleError | None:
    """Fail with ZERO_VALUE when *value* is ``None``, empty, zero, or ``False``."""
    shape = classify(value)
    if shape is Shape.UNSUPPORTED:
        return unsupported_error(value)
    if shape is Shape.ABSENT:
        is_zero = True
    elif shape in COLLECTION_SHAPES:
        is_zero = len(value) == 0
    elif shape is Shape.NUMBER:
        is_zero = value == 0
    elif shape is Shape.BOOLEAN:
        is_zero = not value
    else:
        is_zero = False
    if is_zero:
        return RuleError.of(ErrorKind.ZERO_VALUE)
    return None
