"""Tests for the plugin_host entry point."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from plugin_host import runner as runner_module
from plugin_host.runner import main, main_async

_MANIFEST = {"manifest_version": 1, "name": "Hi", "version": "1.0.0", "app_min_version": "1.0"}


def _settings(tmp_path: Path) -> dict:
    return {
        "app": {"version": "1.4.0"},
        "plugins": {"dir": str(tmp_path / "plugins"), "manifest_namespace": "plugin"},
        "logging": {"file": str(tmp_path / "app.log"), "log_to_console": False},
    }


def _write_plugins(root: Path) -> None:
    good = root / "good"
    good.mkdir(parents=True)
    (good / "manifest.json").write_text(json.dumps(_MANIFEST), encoding="utf-8")
    (good / "index.js").write_text("", encoding="utf-8")
    bad = root / "bad.js"
    bad.write_text("no manifest here", encoding="utf-8")


class TestMainAsync:
    @pytest.mark.asyncio
    async def test_scans_configured_dir(self, tmp_path: Path) -> None:
        _write_plugins(tmp_path / "plugins")
        report = await main_async([], _settings(tmp_path))
        assert [r.plugin_id for r in report.loaded] == ["good"]
        assert len(report.failed) == 1

    @pytest.mark.asyncio
    async def test_explicit_paths(self, tmp_path: Path) -> None:
        _write_plugins(tmp_path / "plugins")
        report = await main_async([str(tmp_path / "plugins" / "good")], _settings(tmp_path))
        assert [r.status for r in report.results] == ["loaded"]

    @pytest.mark.asyncio
    async def test_missing_plugins_dir(self, tmp_path: Path) -> None:
        report = await main_async([], _settings(tmp_path))
        assert report.results == []


class TestMain:
    def test_unknown_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--bogus"]) == 2
        assert "Unknown option" in capsys.readouterr().err

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--help"]) == 0
        assert "python -m plugin_host" in capsys.readouterr().out

    def test_prints_summary(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _write_plugins(tmp_path / "plugins")
        with (
            patch.object(runner_module, "load_settings", return_value=_settings(tmp_path)),
            patch.object(runner_module, "setup_logging"),
            patch.object(runner_module, "load_dotenv"),
        ):
            code = main([])
        out = capsys.readouterr().out
        assert code == 0
        assert "loaded   good" in out
        assert "1 loaded, 0 skipped, 1 failed" in out

    def test_console_flag_leaves_loaded_settings_untouched(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        with (
            patch.object(runner_module, "load_settings", return_value=settings),
            patch.object(runner_module, "setup_logging") as setup,
            patch.object(runner_module, "load_dotenv"),
        ):
            assert main(["--console"]) == 0
        assert settings["logging"]["log_to_console"] is False
        used = setup.call_args.args[1]
        assert used["logging"]["log_to_console"] is True
        assert used is not settings
