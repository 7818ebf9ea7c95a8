"""Runtime shape classification.

Rules branch on the *shape* of a value, never on its content. ``classify``
maps any Python object onto a closed set of shapes so every rule works
from the same vocabulary.

``None`` is the only absent value. Python has no pointer/value split, so a
present object is already a non-null reference.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import StrEnum
from fractions import Fraction
from typing import Any

from pydantic import BaseModel


class Shape(StrEnum):
    """Closed set of value shapes a rule can see."""

    ABSENT = "absent"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


COLLECTION_SHAPES = frozenset({Shape.STRING, Shape.BYTES, Shape.SEQUENCE, Shape.MAPPING, Shape.SET})

_NUMBER_TYPES = (int, float, Decimal, Fraction)
_BYTES_TYPES = (bytes, bytearray, memoryview)


def is_record(value: Any) -> bool:
    """Whether *value* is a record instance (dataclass, pydantic model, named tuple)."""
    if isinstance(value, BaseModel):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def classify(value: Any) -> Shape:
    """Return the :class:`Shape` of *value*.

    Order matters: ``bool`` is an ``int`` subclass, ``str`` is a
    ``Sequence``, and named tuples are tuples.

    Examples:
        >>> classify(None)
        <Shape.ABSENT: 'absent'>
        >>> classify(0)
        <Shape.NUMBER: 'number'>
        >>> classify("")
        <Shape.STRING: 'string'>
        >>> classify(len)
        <Shape.UNSUPPORTED: 'unsupported'>
    """
    if value is None:
        return Shape.ABSENT
    if isinstance(value, bool):
        return Shape.BOOLEAN
    if isinstance(value, _NUMBER_TYPES):
        return Shape.NUMBER
    if isinstance(value, str):
        return Shape.STRING
    if isinstance(value, _BYTES_TYPES):
        return Shape.BYTES
    if is_record(value):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, Set):
        return Shape.SET
    if isinstance(value, Sequence):
        return Shape.SEQUENCE
    return Shape.UNSUPPORTED
