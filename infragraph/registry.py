"""
Plugin Registry
===============

Ordered catalogue of resource plugins keyed by resource kind.
"""

from typing import Any, Dict, Iterable, List, Optional

from infragraph.exceptions import PluginRegistrationError
from infragraph.models import CATEGORY_ORDER, ResourceCategory, ResourceKind
from infragraph.plugins import BUILTIN_PLUGINS, ResourcePlugin


class PluginRegistry:
    """
    Keyed catalogue of resource plugins.

    The registry is filled once at construction; registration order decides the
    order of ``list()`` and, within a category, of ``list_by_category()``.
    """

    def __init__(self, plugins: Iterable[ResourcePlugin] = (), require_all: bool = False):
        """
        Args:
            plugins: Plugin instances to register, in display order
            require_all: Also fail when some resource kind has no plugin

        Raises:
            PluginRegistrationError: If a kind is registered twice, or a kind is
                missing while ``require_all`` is set
        """
        self._plugins: Dict[ResourceKind, ResourcePlugin] = {}

        for plugin in plugins:
            self._register(plugin)

        if require_all:
            missing = [kind.value for kind in ResourceKind if kind not in self._plugins]
            if missing:
                raise PluginRegistrationError(
                    f"No plugin registered for: {', '.join(missing)}", kind=missing[0]
                )

    def _register(self, plugin: ResourcePlugin) -> None:
        if plugin.kind in self._plugins:
            raise PluginRegistrationError(
                f"Plugin for '{plugin.kind.value}' already registered by "
                f"{type(self._plugins[plugin.kind]).__name__}",
                kind=plugin.kind.value,
            )
        self._plugins[plugin.kind] = plugin

    def get(self, kind: Any) -> Optional[ResourcePlugin]:
        """
        Get the plugin for a resource kind.

        Args:
            kind: ResourceKind or its string value

        Returns:
            The plugin, or None if not found
        """
        parsed = ResourceKind.parse(kind)
        if parsed is None:
            return None
        return self._plugins.get(parsed)

    def list(self) -> List[ResourcePlugin]:
        """All plugins in registration order."""
        return list(self._plugins.values())

    def list_by_category(self) -> Dict[ResourceCategory, List[ResourcePlugin]]:
        """Plugins grouped in category display order; empty categories are omitted."""
        grouped: Dict[ResourceCategory, List[ResourcePlugin]] = {cat: [] for cat in CATEGORY_ORDER}
        for plugin in self._plugins.values():
            grouped[plugin.category].append(plugin)
        return {cat: plugins for cat, plugins in grouped.items() if plugins}

    def kinds(self) -> List[ResourceKind]:
        return list(self._plugins.keys())

    def __contains__(self, kind: Any) -> bool:
        return self.get(kind) is not None

    def __len__(self) -> int:
        return len(self._plugins)


def build_default_registry() -> PluginRegistry:
    """Registry of every built-in plugin; fails fast if any kind lacks one."""
    return PluginRegistry([plugin_cls() for plugin_cls in BUILTIN_PLUGINS], require_all=True)
