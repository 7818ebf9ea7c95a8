"""Tag-driven validation of records.

A record is a dataclass or pydantic model instance. Each field may carry a
tag string (by default under the ``"validate"`` key) listing the rules to
run on its value. Nested records are walked too, so one call validates a
whole object graph and reports every failing field by path. A record that
refers back to one already being walked on the same path is not entered
again.

Usage::

    @dataclass
    class Place:
        lat: float | None = validated_field("required,latitude", default=None)
        lng: float | None = validated_field("required,longitude", default=None)

    errors = Validator().validate(Place(lat=91.0, lng=2.0))
    # {"lat": [RuleError(kind=INVALID, message="91 is not a valid latitude")]}
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from walidator.domain.errors import ErrorKind, RuleError, TagSyntaxError, ValidationFailed
from walidator.domain.registry import RuleRegistry
from walidator.domain.shapes import is_record
from walidator.domain.tags import SKIP_TAG, parse_tags

DEFAULT_TAG_NAME = "validate"


def _walkable(value: Any) -> bool:
    """Records whose fields can carry tags (named tuples cannot)."""
    return is_record(value) and not isinstance(value, tuple)


def validated_field(tags: str, *, tag_name: str = DEFAULT_TAG_NAME, **kwargs: Any) -> Any:
    """``dataclasses.field`` carrying a validation tag in its metadata."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag_name] = tags
    return dataclasses.field(metadata=metadata, **kwargs)


class Validator:
    """Run registered rules against values and records.

    Args:
        registry: Rules available to tags. Defaults to the built-ins.
        tag_name: Metadata key holding each field's tag string.
    """

    def __init__(self, registry: RuleRegistry | None = None, tag_name: str = DEFAULT_TAG_NAME) -> None:
        self.registry = registry if registry is not None else RuleRegistry.default()
        self.tag_name = tag_name

    def valid(self, value: Any, tags: str) -> list[RuleError]:
        """Run every rule in *tags* against *value*, collecting all errors."""
        if tags.strip() == SKIP_TAG:
            return []
        try:
            parsed = parse_tags(tags)
        except TagSyntaxError as exc:
            return [RuleError.of(ErrorKind.UNKNOWN_TAG, tags=tags, reason=str(exc))]

        missing = [t.name for t in parsed if t.name not in self.registry]
        if missing:
            return [RuleError.of(ErrorKind.UNKNOWN_TAG, rule=name) for name in missing]

        errors: list[RuleError] = []
        for tag in parsed:
            error = self.registry[tag.name](value, tag.param)
            if error is not None:
                errors.append(error)
        return errors

    def validate(self, obj: Any) -> dict[str, list[RuleError]]:
        """Validate every tagged field of the record *obj*.

        Returns:
            Field path -> errors. Empty when everything passes.

        Raises:
            TypeError: If *obj* is not a dataclass or pydantic model instance.
        """
        if not _walkable(obj):
            msg = f"validate() expects a dataclass or pydantic model instance, got {type(obj).__name__}"
            raise TypeError(msg)
        errors: dict[str, list[RuleError]] = {}
        self._walk(obj, "", errors, set())
        return errors

    def assert_valid(self, obj: Any) -> None:
        """Like :meth:`validate`, but raise :class:`ValidationFailed` on any error."""
        errors = self.validate(obj)
        if errors:
            raise ValidationFailed(errors)

    # ------------------------------------------------------------------
    # Record traversal
    # ------------------------------------------------------------------

    def _walk(self, obj: Any, prefix: str, errors: dict[str, list[RuleError]], active: set[int]) -> None:
        # Records already being walked further up this path are back-references.
        if id(obj) in active:
            return
        active.add(id(obj))
        try:
            self._walk_fields(obj, prefix, errors, active)
        finally:
            active.discard(id(obj))

    def _walk_fields(self, obj: Any, prefix: str, errors: dict[str, list[RuleError]], active: set[int]) -> None:
        for name, tags, value in self._tagged_fields(obj):
            path = f"{prefix}{name}"
            if tags is not None:
                if tags.strip() == SKIP_TAG:
                    continue
                found = self.valid(value, tags)
                if found:
                    errors[path] = found
            self._descend(value, path, errors, active)

    def _descend(self, value: Any, path: str, errors: dict[str, list[RuleError]], active: set[int]) -> None:
        if _walkable(value):
            self._walk(value, f"{path}.", errors, active)
        elif isinstance(value, Mapping):
            for key, item in value.items():
                if _walkable(item):
                    self._walk(item, f"{path}[{key}].", errors, active)
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            for index, item in enumerate(value):
                if _walkable(item):
                    self._walk(item, f"{path}[{index}].", errors, active)

    def _tagged_fields(self, obj: Any) -> Iterator[tuple[str, str | None, Any]]:
        """Yield ``(name, tags, value)`` for every field of a record."""
        if isinstance(obj, BaseModel):
            for name, info in type(obj).model_fields.items():
                extra = info.json_schema_extra
                tags = extra.get(self.tag_name) if isinstance(extra, dict) else None
                yield name, tags if isinstance(tags, str) else None, getattr(obj, name)
            return
        for f in dataclasses.fields(obj):
            tags = f.metadata.get(self.tag_name)
            yield f.name, tags if isinstance(tags, str) else None, getattr(obj, f.name)
