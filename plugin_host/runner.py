"""Entry point for the plugin host: load settings, set up logging, load and hand off plugins.

Usage:
    python -m plugin_host [--console] [PATH ...]

With no PATH the configured plugins directory (plugins.dir) is scanned. Each PATH
is either a .js bundle or a plugin directory.

Options:
    --console   Also log to stderr.
"""

import asyncio
import copy
import sys
from pathlib import Path

from dotenv import load_dotenv

from plugin_host.fs import LocalFsDriver
from plugin_host.logging_config import setup_logging
from plugin_host.plugins import BatchReport, LoggingPluginRunner, PluginService
from plugin_host.settings import get_setting, load_settings
from plugin_host.store import AppStore

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

_EXIT_OK = 0
_EXIT_USAGE = 2


def _print_report(report: BatchReport) -> None:
    for result in report.results:
        if result.status == "loaded":
            print(f"loaded   {result.plugin_id}  ({result.path})")
        elif result.status == "skipped":
            print(f"skipped  {result.path}")
        else:
            print(f"failed   {result.path}: {result.error}")
    print(
        f"{len(report.loaded)} loaded, {len(report.skipped)} skipped, {len(report.failed)} failed"
    )


async def main_async(paths: list[str], settings: dict) -> BatchReport:
    """Bootstrap: store -> service -> load_and_run_plugins."""
    store = AppStore()
    service = PluginService()
    service.initialize(
        app_version=str(get_setting(settings, "app.version", "1.4.0")),
        platform_implementation=None,
        runner=LoggingPluginRunner(),
        store=store,
        fs_driver=LocalFsDriver(),
        manifest_namespace=get_setting(settings, "plugins.manifest_namespace", "plugin"),
    )
    if paths:
        return await service.load_and_run_plugins(paths)
    plugins_dir = _PROJECT_ROOT / get_setting(settings, "plugins.dir", "sandbox/plugins")
    if not plugins_dir.is_dir():
        print(f"Plugins directory not found: {plugins_dir}", file=sys.stderr)
        return BatchReport()
    return await service.load_and_run_plugins(plugins_dir)


def main(argv: list[str] | None = None) -> int:
    """Synchronous entry. Returns the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    if any(a in ("-h", "--help") for a in args):
        print(__doc__)
        return _EXIT_OK
    unknown = [a for a in args if a.startswith("-") and a != "--console"]
    if unknown:
        print(f"Unknown option: {unknown[0]}", file=sys.stderr)
        return _EXIT_USAGE

    load_dotenv(_PROJECT_ROOT / ".env")
    # load_settings() returns a cached dict shared with other callers
    settings = copy.deepcopy(load_settings())
    if "--console" in args:
        settings["logging"]["log_to_console"] = True
    setup_logging(_PROJECT_ROOT, settings)

    paths = [a for a in args if not a.startswith("-")]
    try:
        report = asyncio.run(main_async(paths, settings))
    except KeyboardInterrupt:
        return _EXIT_OK
    _print_report(report)
    return _EXIT_OK


__all__ = ["main", "main_async"]
