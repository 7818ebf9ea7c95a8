"""What ValidationService hands back to the CLI.

A result is either a success carrying ``data`` or a failure carrying a
:class:`ServiceError` whose ``code`` says which way it failed:

* ``VALIDATION_FAILED``: a rule reported a violation.
* ``RULE_NOT_APPLICABLE``: the rule cannot judge the value or its parameter.
* ``UNKNOWN_RULE``: no rule is registered under the requested name.
* ``INVALID_INPUT``: the document could not be decoded, or no rules apply.
* ``FILE_NOT_FOUND``: the document does not exist.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ErrorCode = Literal[
    "VALIDATION_FAILED",
    "RULE_NOT_APPLICABLE",
    "UNKNOWN_RULE",
    "INVALID_INPUT",
    "FILE_NOT_FOUND",
]
Operation = Literal["check", "rules", "validate"]


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one ``check``, ``rules`` or ``validate`` operation."""

    model_config = {"frozen": True}

    ok: bool
    op: Operation
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> ServiceResult:
        if self.ok == (self.error is not None):
            msg = "a failed result needs an error and a successful one must not have one"
            raise ValueError(msg)
        return self

    @classmethod
    def success(
        cls,
        op: Operation,
        data: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=list(warnings))

    @classmethod
    def failure(
        cls,
        op: Operation,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail or {})
        return cls(ok=False, op=op, error=error, warnings=list(warnings))

    @property
    def failed_fields(self) -> dict[str, list[dict[str, Any]]]:
        """Per-field errors of a failed ``validate``; empty otherwise."""
        if self.error is None:
            return {}
        return self.error.detail.get("fields", {})
