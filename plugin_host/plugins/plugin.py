"""Plugin entity: a loaded, validated plugin waiting to be handed to the runner."""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from plugin_host.plugins.manifest import PluginManifest

Dispatch = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class DeprecationNotice:
    """Message for the plugin author; the described usage becomes an error at goes_into_effect_at."""

    goes_into_effect_at: str
    message: str


class Plugin:
    """Loaded plugin. id and base_dir are fixed; enabled can only be switched off."""

    def __init__(
        self,
        plugin_id: str,
        base_dir: str,
        manifest: PluginManifest,
        script_text: str,
        logger: logging.Logger,
        dispatch: Dispatch,
    ) -> None:
        self._id = plugin_id
        self._base_dir = base_dir
        self.manifest = manifest
        self.script_text = script_text
        self.logger = logger
        self._dispatch = dispatch
        self._enabled = True
        self._deprecation_notices: list[DeprecationNotice] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        if value and not self._enabled:
            raise ValueError(f"Plugin {self._id} was disabled and cannot be re-enabled")
        self._enabled = bool(value)

    @property
    def deprecation_notices(self) -> list[DeprecationNotice]:
        return list(self._deprecation_notices)

    def dispatch(self, action: dict[str, Any]) -> None:
        """Send an action to the application store."""
        self._dispatch(action)

    def deprecation_notice(self, goes_into_effect_at: str, message: str) -> None:
        notice = DeprecationNotice(goes_into_effect_at=goes_into_effect_at, message=message)
        self._deprecation_notices.append(notice)
        self.logger.warning(
            'Plugin "%s": DEPRECATION NOTICE (becomes an error in %s): %s',
            self._id,
            goes_into_effect_at,
            message,
        )

    def __repr__(self) -> str:
        return f"Plugin(id={self._id!r}, base_dir={self._base_dir!r}, enabled={self._enabled})"
