"""Extension layer — rule plugins via pluggy.

Discovery: entry_points (pip-installed) in the ``walidator.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from walidator.plugins.hookspecs import hookimpl
from walidator.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
