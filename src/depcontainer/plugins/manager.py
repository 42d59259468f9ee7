"""Plugin discovery, loading, and strategy dispatch.

Discovery: entry_points (pip-installed) in the ``depcontainer.plugins``
group via pluggy's setuptools loader. The built-in namespace-suffix
strategy is always registered and runs last, so installed plugins can
override it or defer to it by returning None.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from depcontainer.plugins.builtins import NamespaceSuffixPlugin
from depcontainer.plugins.hookspecs import DepContainerHookSpec

PROJECT_NAME = "depcontainer"
ENTRY_POINT_GROUP = "depcontainer.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin registration and discriminator strategy dispatch."""

    def __init__(self, *, builtins: bool = True) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DepContainerHookSpec)
        self._loaded: bool = False
        if builtins:
            self.register_plugin(NamespaceSuffixPlugin(), name="namespace-suffix")

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def match_discriminator(self, discriminator: str, operand: Any, separator: str) -> bool:
        """Ask the registered strategies whether *discriminator* names *operand*.

        INVARIANT: Strategy failures are warnings, never errors. A failing
        or undecided strategy chain is treated as no match.
        """
        try:
            result = self._pm.hook.match_discriminator(
                discriminator=discriminator,
                operand=operand,
                separator=separator,
            )
        except Exception:
            logger.warning(
                "Discriminator strategy failed for %r",
                discriminator,
                exc_info=True,
            )
            return False
        return bool(result)

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
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
