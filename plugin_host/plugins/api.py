"""PluginApi: the object handed to the runner together with the plugin.

Everything a running plugin can reach goes through this object.
"""

import logging
from typing import Any

from plugin_host.plugins.plugin import Plugin
from plugin_host.store import Store


class PluginApi:
    """Capability surface bound to one plugin."""

    def __init__(
        self,
        logger: logging.Logger,
        platform_implementation: Any,
        plugin: Plugin,
        store: Store,
    ) -> None:
        self.logger = logger
        self.platform_implementation = platform_implementation
        self._plugin = plugin
        self._store = store

    @property
    def plugin(self) -> Plugin:
        return self._plugin

    @property
    def plugin_id(self) -> str:
        return self._plugin.id

    @property
    def enabled(self) -> bool:
        return self._plugin.enabled

    def dispatch(self, action: dict[str, Any]) -> None:
        """Send an action to the store on behalf of the plugin."""
        self._plugin.dispatch(action)
