"""Tag grammar — parsing ``"required,min=1,regexp=^a\\,b$"`` into rules.

Rules are comma separated. A backslash-escaped comma stays inside the
current rule. Each rule is ``name`` or ``name=param``, split on the first
``=``.
"""

from __future__ import annotations

from typing import NamedTuple

from walidator.domain.errors import TagSyntaxError

SKIP_TAG = "-"


class Tag(NamedTuple):
    name: str
    param: str = ""


def split_unescaped(text: str, sep: str = ",") -> list[str]:
    """Split *text* on *sep* unless it is preceded by a backslash.

    Examples:
        >>> split_unescaped("a,b")
        ['a', 'b']
        >>> split_unescaped(r"regexp=^a\\,b$,required")
        ['regexp=^a,b$', 'required']
    """
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and text[i + 1 : i + 2] == sep:
            current.append(sep)
            i += 2
            continue
        if char == sep:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    parts.append("".join(current))
    return parts


def parse_tags(text: str) -> list[Tag]:
    """Parse a tag string into ``Tag`` entries, in order.

    Raises:
        TagSyntaxError: If any entry has an empty rule name.
    """
    tags: list[Tag] = []
    for raw in split_unescaped(text):
        name, _, param = raw.partition("=")
        name = name.strip()
        if not name:
            msg = f"Empty rule name in tag {text!r}"
            raise TagSyntaxError(msg)
        tags.append(Tag(name, param.strip()))
    return tags
