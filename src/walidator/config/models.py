"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, walidator.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from walidator.domain.walker import DEFAULT_TAG_NAME


class ValidatorConfig(BaseModel):
    """[validator] section."""

    model_config = {"frozen": True}

    tag_name: str = DEFAULT_TAG_NAME

    @field_validator("tag_name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            msg = "tag_name must not be empty"
            raise ValueError(msg)
        return value.strip()


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
