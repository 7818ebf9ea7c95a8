"""Pattern matching rules: ``regexp``, ``uuid``, and config-declared patterns.

Matching is an unanchored search; anchors belong in the pattern itself.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable
from typing import Any

from walidator.domain.errors import ErrorKind, RuleError, unsupported_error
from walidator.domain.shapes import Shape, classify

# RFC 4122 textual form, versions 1-5. ``\Z`` rejects a trailing newline,
# which ``$`` would let through.
UUID_PATTERN = r"(?i)^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z"


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def regex(value: Any, pattern: str) -> RuleError | None:
    """Match a string against *pattern*.

    Returns:
        None when *value* is ``None`` or matches; UNSUPPORTED for
        non-strings; BAD_PARAMETER when *pattern* does not compile;
        REGEXP when the string does not match.
    """
    shape = classify(value)
    if shape is Shape.ABSENT:
        return None
    if shape is not Shape.STRING:
        return unsupported_error(value)
    try:
        compiled = compile_pattern(pattern)
    except re.error as exc:
        return RuleError.of(ErrorKind.BAD_PARAMETER, pattern=pattern, reason=str(exc))
    if compiled.search(value) is None:
        return RuleError.of(ErrorKind.REGEXP, pattern=pattern)
    return None


def regexp(value: Any, param: str) -> RuleError | None:
    """Rule form of :func:`regex`: the tag parameter is the pattern."""
    return regex(value, param)


def uuid(value: Any, param: str) -> RuleError | None:
    """Check that a string is a canonical hyphenated UUID (any case)."""
    return regex(value, UUID_PATTERN)


def pattern_rule(pattern: str, name: str = "pattern") -> Callable[[Any, str], RuleError | None]:
    """Build a rule bound to a fixed *pattern*.

    Raises:
        re.error: If *pattern* does not compile. Declared patterns are
            checked up front rather than on every call.
    """
    compile_pattern(pattern)

    def rule(value: Any, param: str) -> RuleError | None:
        return regex(value, pattern)

    rule.__name__ = name
    rule.__qualname__ = name
    rule.__doc__ = f"Match against {pattern!r}."
    return rule
