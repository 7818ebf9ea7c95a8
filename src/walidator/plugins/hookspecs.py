"""Pluggy hook specifications for walidator.

One setup-time hook lets plugins contribute named rules to the registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from walidator.domain.registry import Rule

PROJECT_NAME = "walidator"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class WalidatorHookSpec:
    """Hook specifications for the walidator plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, Rule] | None:
        """Return rule name -> rule mappings to add to the registry."""
