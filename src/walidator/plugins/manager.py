"""Plugin discovery and rule collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus direct registration for in-process plugins.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from walidator.plugins.hookspecs import PROJECT_NAME, WalidatorHookSpec

if TYPE_CHECKING:
    from walidator.domain.registry import RuleRegistry

ENTRY_POINT_GROUP = "walidator.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and rule collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(WalidatorHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``walidator.plugins`` entry-point group.

        Returns a list of loaded plugin names.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def extend_registry(self, registry: RuleRegistry) -> RuleRegistry:
        """Return *registry* extended with every plugin's rules.

        A plugin whose hook raises, returns a non-dict, or contributes a
        conflicting rule is skipped with a warning.
        """
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_rules", None)
            if hook is None:
                continue

            try:
                rules = hook()
            except Exception:
                logger.warning("Failed to collect rules from plugin %s", plugin_name, exc_info=True)
                continue

            if rules is None:
                continue
            if not isinstance(rules, dict):
                logger.warning("Plugin %s returned non-dict rule registrations", plugin_name)
                continue

            try:
                registry = registry.extend(rules)
            except (TypeError, ValueError):
                logger.warning("Skipping rules from plugin %s", plugin_name, exc_info=True)
                continue
            logger.debug("Registered rules from %s: %s", plugin_name, sorted(rules))
        return registry

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True)
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
