"""walidator — a registry of named value rules driven by field tags.

Rules share one contract: ``rule(value, param) -> RuleError | None``.
"""

from walidator.domain.errors import ErrorKind, RuleError, TagSyntaxError, ValidationFailed
from walidator.domain.geo import latitude, longitude
from walidator.domain.patterns import regex, uuid
from walidator.domain.presence import nonzero, required
from walidator.domain.registry import BUILTIN_RULES, Rule, RuleRegistry
from walidator.domain.shapes import Shape, classify
from walidator.domain.walker import Validator, validated_field

__version__ = "0.1.0"

__all__ = [
    "BUILTIN_RULES",
    "ErrorKind",
    "Rule",
    "RuleError",
    "RuleRegistry",
    "Shape",
    "TagSyntaxError",
    "ValidationFailed",
    "Validator",
    "__version__",
    "classify",
    "latitude",
    "longitude",
    "nonzero",
    "regex",
    "required",
    "uuid",
    "validated_field",
]
