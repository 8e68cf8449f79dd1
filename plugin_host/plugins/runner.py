"""Execution engine interface. The engine that actually runs plugin code lives outside this package."""

import logging
from abc import ABC, abstractmethod

from plugin_host.plugins.api import PluginApi
from plugin_host.plugins.plugin import Plugin

logger = logging.getLogger(__name__)


class BasePluginRunner(ABC):
    """Runs a loaded plugin with its API object."""

    @abstractmethod
    async def run(self, plugin: Plugin, api: PluginApi) -> None:
        """Start plugin code. Called once per loaded plugin, after registration."""


class LoggingPluginRunner(BasePluginRunner):
    """Records hand-offs without executing anything. Used by the CLI."""

    def __init__(self) -> None:
        self.runs: list[str] = []

    async def run(self, plugin: Plugin, api: PluginApi) -> None:
        self.runs.append(plugin.id)
        logger.info(
            "Plugin %s handed to runner (enabled=%s, %d chars of script)",
            plugin.id,
            plugin.enabled,
            len(plugin.script_text),
        )
