"""Plugin system: bundle parsing, ids, manifest, entity, service, runner interface."""

from plugin_host.plugins.api import PluginApi
from plugin_host.plugins.bundle import (
    DEFAULT_MANIFEST_NAMESPACE,
    PluginBundle,
    parse_plugin_js_bundle,
)
from plugin_host.plugins.errors import (
    DuplicateIdentifier,
    InvalidManifestJson,
    InvalidPluginId,
    ManifestNotFound,
    ManifestSchemaInvalid,
    PluginError,
    PluginNotFound,
)
from plugin_host.plugins.ids import MAX_PLUGIN_ID_LENGTH, make_plugin_id
from plugin_host.plugins.manifest import (
    DEFAULT_APP_MIN_VERSION,
    ManifestValidation,
    PluginManifest,
    manifest_from_object,
    validate_manifest,
)
from plugin_host.plugins.plugin import DeprecationNotice, Plugin
from plugin_host.plugins.runner import BasePluginRunner, LoggingPluginRunner
from plugin_host.plugins.service import BatchReport, PluginLoadResult, PluginService

__all__ = [
    "BasePluginRunner",
    "BatchReport",
    "DEFAULT_APP_MIN_VERSION",
    "DEFAULT_MANIFEST_NAMESPACE",
    "DeprecationNotice",
    "DuplicateIdentifier",
    "InvalidManifestJson",
    "InvalidPluginId",
    "LoggingPluginRunner",
    "MAX_PLUGIN_ID_LENGTH",
    "ManifestNotFound",
    "ManifestSchemaInvalid",
    "ManifestValidation",
    "Plugin",
    "PluginApi",
    "PluginBundle",
    "PluginError",
    "PluginLoadResult",
    "PluginManifest",
    "PluginNotFound",
    "PluginService",
    "make_plugin_id",
    "manifest_from_object",
    "parse_plugin_js_bundle",
    "validate_manifest",
]
