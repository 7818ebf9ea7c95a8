"""Size rules: ``len``, ``min``, ``max``.

Strings are measured in characters, collections by ``len()``. ``min`` and
``max`` also compare numbers by their value; ``len`` does not apply to
numbers. The tag parameter is the bound.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from walidator.domain.errors import ErrorKind, RuleError, unsupported_error
from walidator.domain.shapes import COLLECTION_SHAPES, Shape, classify


def _parse_bound(param: str, *, integral: bool) -> int | float | None:
    text = param.strip()
    try:
        return int(text) if integral else float(text)
    except ValueError:
        return None


def _measure(value: Any, *, numbers: bool) -> tuple[int | float | None, bool]:
    """Return ``(measure, integral)`` for *value*, or ``(None, False)`` if unmeasurable."""
    shape = classify(value)
    if shape in COLLECTION_SHAPES:
        return len(value), True
    if numbers and shape is Shape.NUMBER:
        return value, isinstance(value, int)
    return None, False


def _bound_rule(
    name: str,
    kind: ErrorKind,
    fails: Callable[[Any, Any], bool],
    *,
    numbers: bool = True,
) -> Callable[[Any, str], RuleError | None]:
    def rule(value: Any, param: str) -> RuleError | None:
        if value is None:
            return None
        measure, integral = _measure(value, numbers=numbers)
        if measure is None:
            return unsupported_error(value)
        bound = _parse_bound(param, integral=integral)
        if bound is None:
            return RuleError.of(ErrorKind.BAD_PARAMETER, param=param)
        if fails(measure, bound):
            return RuleError.of(kind, bound=bound, actual=measure)
        return None

    rule.__name__ = name
    rule.__qualname__ = name
    return rule


len_ = _bound_rule("len", ErrorKind.LEN, operator.ne, numbers=False)
len_.__doc__ = "Fail with LEN unless the length equals the parameter."

min_ = _bound_rule("min", ErrorKind.MIN, operator.lt)
min_.__doc__ = "Fail with MIN when the size is below the parameter."

max_ = _bound_rule("max", ErrorKind.MAX, operator.gt)
max_.__doc__ = "Fail with MAX when the size is above the parameter."
