"""Plugin loading errors. Everything raised while loading a single plugin derives from PluginError
(except file-system errors, which stay OSError)."""

from typing import Any


class PluginError(Exception):
    """Base class for plugin loading failures."""


class ManifestNotFound(PluginError):
    """Bundle text has no complete manifest block."""


class InvalidManifestJson(PluginError):
    """Manifest text is not a JSON object."""


class ManifestSchemaInvalid(PluginError, ValueError):
    """Manifest object does not match the manifest schema."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors: list[dict[str, Any]] = errors or []


class DuplicateIdentifier(PluginError):
    """A plugin with the same id is already registered."""

    def __init__(self, plugin_id: str) -> None:
        super().__init__(f"There is already a plugin with this ID: {plugin_id}")
        self.plugin_id = plugin_id


class InvalidPluginId(PluginError, ValueError):
    """Source name normalizes to an empty id."""


class PluginNotFound(PluginError):
    """No registered plugin has the requested id."""

    def __init__(self, plugin_id: str) -> None:
        super().__init__(f"Plugin not found: {plugin_id}")
        self.plugin_id = plugin_id
