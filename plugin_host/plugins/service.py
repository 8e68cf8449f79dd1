"""PluginService: load plugins from bundles or directories, gate on app version, register and run them."""

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

import semver

from plugin_host.fs import FsDriver, LocalFsDriver
from plugin_host.plugins.api import PluginApi
from plugin_host.plugins.bundle import DEFAULT_MANIFEST_NAMESPACE, parse_plugin_js_bundle
from plugin_host.plugins.errors import DuplicateIdentifier, InvalidManifestJson, PluginNotFound
from plugin_host.plugins.ids import make_plugin_id
from plugin_host.plugins.manifest import (
    DEFAULT_APP_MIN_VERSION,
    manifest_from_object,
    parse_version,
)
from plugin_host.plugins.plugin import Plugin
from plugin_host.plugins.runner import BasePluginRunner
from plugin_host.store import Store, StoreActions

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".js",)
DISABLED_PREFIX = "_"
MANIFEST_FILE = "manifest.json"
SCRIPT_FILE = "index.js"
DIST_DIR = "dist"

# App version from which a missing app_min_version is an error
_APP_MIN_VERSION_REQUIRED_AT = "1.5"
_APP_MIN_VERSION_NOTICE = (
    'The manifest must contain an "app_min_version" key, which should be the minimum version '
    f'of the app you support. It was automatically set to "{DEFAULT_APP_MIN_VERSION}", but '
    "please update your manifest.json file."
)


def _is_script_path(path: str) -> bool:
    return path.lower().endswith(SCRIPT_EXTENSIONS)


def _normalize_dir(path: str | Path) -> str:
    """Drop trailing slashes."""
    return str(Path(path))


@dataclass(frozen=True)
class PluginLoadResult:
    """Outcome of one batch candidate."""

    path: str
    status: Literal["loaded", "skipped", "failed"]
    plugin_id: str | None = None
    error: Exception | None = None


@dataclass
class BatchReport:
    """Per-candidate results of load_and_run_plugins, in candidate order."""

    results: list[PluginLoadResult] = field(default_factory=list)

    def _with_status(self, status: str) -> list[PluginLoadResult]:
        return [r for r in self.results if r.status == status]

    @property
    def loaded(self) -> list[PluginLoadResult]:
        return self._with_status("loaded")

    @property
    def skipped(self) -> list[PluginLoadResult]:
        return self._with_status("skipped")

    @property
    def failed(self) -> list[PluginLoadResult]:
        return self._with_status("failed")


class PluginService:
    """Plugin lifecycle: resolve path -> extract manifest -> validate -> gate -> register -> run.

    Owns the registry of plugins for the lifetime of the application. Not safe for
    concurrent callers: loading is meant to be driven from one sequential path.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._plugins: dict[str, Plugin] = {}
        self._app_version: semver.Version | None = None
        self._platform_implementation: Any = None
        self._runner: BasePluginRunner | None = None
        self._store: Store | None = None
        self._fs: FsDriver = LocalFsDriver()
        self._manifest_namespace = DEFAULT_MANIFEST_NAMESPACE

    def initialize(
        self,
        app_version: str,
        platform_implementation: Any,
        runner: BasePluginRunner,
        store: Store,
        fs_driver: FsDriver | None = None,
        manifest_namespace: str = DEFAULT_MANIFEST_NAMESPACE,
    ) -> None:
        """Bind collaborators. Must be called before any load or run."""
        self._app_version = parse_version(app_version)
        self._platform_implementation = platform_implementation
        self._runner = runner
        self._store = store
        if fs_driver is not None:
            self._fs = fs_driver
        self._manifest_namespace = manifest_namespace

    @property
    def app_version(self) -> str:
        self._require_initialized()
        assert self._app_version is not None
        return str(self._app_version)

    @property
    def plugins(self) -> Mapping[str, Plugin]:
        """Read-only view of registered plugins."""
        return MappingProxyType(self._plugins)

    def plugin_by_id(self, plugin_id: str) -> Plugin:
        if plugin_id not in self._plugins:
            raise PluginNotFound(plugin_id)
        return self._plugins[plugin_id]

    def _require_initialized(self) -> None:
        if self._app_version is None or self._store is None or self._runner is None:
            raise RuntimeError("PluginService.initialize() must be called first")

    def _dispatch(self, action: dict[str, Any]) -> None:
        assert self._store is not None
        self._store.dispatch(action)

    async def load_plugin_from_string(
        self, plugin_id: str, base_dir: str | Path, bundle_text: str
    ) -> Plugin:
        """Load a single-file bundle that embeds its manifest block."""
        bundle = parse_plugin_js_bundle(bundle_text, self._manifest_namespace)
        return await self.load_plugin(
            plugin_id, _normalize_dir(base_dir), bundle.manifest_text, bundle.script_text
        )

    async def load_plugin_from_path(self, path: str | Path) -> Plugin:
        """Load a plugin from a .js bundle or a plugin directory (root or dist/)."""
        path = _normalize_dir(path)
        self._require_initialized()

        if _is_script_path(path):
            file_path = Path(path)
            bundle_text = await self._fs.read_file(path)
            return await self.load_plugin_from_string(
                make_plugin_id(file_path.stem), str(file_path.parent), bundle_text
            )

        dist_path = path
        if not await self._fs.exists(str(Path(dist_path) / MANIFEST_FILE)):
            dist_path = str(Path(path) / DIST_DIR)

        self._logger.info("PluginService: Loading plugin from %s", path)

        script_text = await self._fs.read_file(str(Path(dist_path) / SCRIPT_FILE))
        manifest_text = await self._fs.read_file(str(Path(dist_path) / MANIFEST_FILE))
        plugin_id = make_plugin_id(Path(path).name)

        return await self.load_plugin(plugin_id, dist_path, manifest_text, script_text)

    async def load_plugin(
        self, plugin_id: str, base_dir: str | Path, manifest_text: str, script_text: str
    ) -> Plugin:
        """Validate manifest, gate on app version and announce the plugin to the store.

        The returned plugin is not registered yet; run_plugin() does that.
        """
        self._require_initialized()
        assert self._app_version is not None
        base_dir = _normalize_dir(base_dir)

        try:
            manifest_obj = json.loads(manifest_text)
        except json.JSONDecodeError as e:
            raise InvalidManifestJson(f"Invalid JSON in manifest of {plugin_id}: {e}") from e
        if not isinstance(manifest_obj, dict):
            raise InvalidManifestJson(
                f"Manifest of {plugin_id} must be a JSON object, got {type(manifest_obj).__name__}"
            )

        show_app_min_version_notice = False
        if not manifest_obj.get("app_min_version"):
            manifest_obj["app_min_version"] = DEFAULT_APP_MIN_VERSION
            show_app_min_version_notice = True

        manifest = manifest_from_object(manifest_obj)

        # Ids are lossy slugs of file names, so "MyPlugin" and "myplugin" collide.
        if plugin_id in self._plugins:
            raise DuplicateIdentifier(plugin_id)

        plugin = Plugin(plugin_id, base_dir, manifest, script_text, self._logger, self._dispatch)

        if self._app_version < manifest.min_version:
            self._logger.info(
                'PluginService: Plugin "%s" was disabled because it requires app version %s '
                "(running %s)",
                plugin_id,
                manifest.app_min_version,
                self._app_version,
            )
            plugin.enabled = False
        else:
            self._dispatch(
                {
                    "type": StoreActions.PLUGIN_ADD,
                    "plugin": {
                        "id": plugin_id,
                        "views": {},
                        "contentScripts": {},
                    },
                }
            )

        if show_app_min_version_notice:
            plugin.deprecation_notice(_APP_MIN_VERSION_REQUIRED_AT, _APP_MIN_VERSION_NOTICE)

        return plugin

    async def _list_candidates(self, plugin_dir: str) -> list[str]:
        stats = await self._fs.read_dir_stats(plugin_dir)
        return [
            str(Path(plugin_dir) / stat.path)
            for stat in sorted(stats, key=lambda s: s.path)
            if stat.is_directory or _is_script_path(stat.path)
        ]

    async def load_and_run_plugins(
        self, plugin_dir_or_paths: str | Path | Sequence[str | Path]
    ) -> BatchReport:
        """Load and run each candidate in order. Failures are logged, never raised."""
        self._require_initialized()
        if isinstance(plugin_dir_or_paths, (str, Path)):
            plugin_paths = await self._list_candidates(_normalize_dir(plugin_dir_or_paths))
        else:
            plugin_paths = [str(p) for p in plugin_dir_or_paths]

        report = BatchReport()
        for plugin_path in plugin_paths:
            if Path(plugin_path).name.startswith(DISABLED_PREFIX):
                self._logger.info(
                    'PluginService: Plugin name starts with "%s" and has not been loaded: %s',
                    DISABLED_PREFIX,
                    plugin_path,
                )
                report.results.append(PluginLoadResult(path=plugin_path, status="skipped"))
                continue

            try:
                plugin = await self.load_plugin_from_path(plugin_path)
                await self.run_plugin(plugin)
            except Exception as e:
                self._logger.exception("PluginService: Could not load plugin: %s", plugin_path)
                report.results.append(PluginLoadResult(path=plugin_path, status="failed", error=e))
                continue
            report.results.append(
                PluginLoadResult(path=plugin_path, status="loaded", plugin_id=plugin.id)
            )

        return report

    async def run_plugin(self, plugin: Plugin) -> None:
        """Register plugin and hand it to the runner."""
        self._require_initialized()
        assert self._runner is not None and self._store is not None
        existing = self._plugins.get(plugin.id)
        if existing is not None and existing is not plugin:
            raise DuplicateIdentifier(plugin.id)
        self._plugins[plugin.id] = plugin
        api = PluginApi(self._logger, self._platform_implementation, plugin, self._store)
        await self._runner.run(plugin, api)
