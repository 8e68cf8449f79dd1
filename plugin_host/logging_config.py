"""Logging for the plugin host process, built from the "logging" section of settings."""

import logging
import logging.config
from pathlib import Path
from typing import Any

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _level_name(value: Any, default: str = "INFO") -> str:
    name = str(value or default).upper()
    return name if isinstance(getattr(logging, name, None), int) else default


def build_logging_config(project_root: Path, settings: dict[str, Any]) -> dict[str, Any]:
    """dictConfig schema for settings["logging"].

    The rotating log file is always configured: batch load failures are only
    reported there. Console output and per-logger levels are optional.
    """
    cfg = settings.get("logging", {})
    level = _level_name(cfg.get("level"))
    handlers: dict[str, dict[str, Any]] = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "level": level,
            "filename": str(project_root / cfg.get("file", "sandbox/logs/app.log")),
            "maxBytes": int(cfg.get("max_bytes", 10 * 1024 * 1024)),
            "backupCount": int(cfg.get("backup_count", 3)),
            "encoding": "utf-8",
        },
    }
    if cfg.get("log_to_console", False):
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": level,
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": _FORMAT, "datefmt": _DATEFMT}},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {
            name: {"level": _level_name(logger_level)}
            for name, logger_level in (cfg.get("levels") or {}).items()
        },
    }


def setup_logging(project_root: Path, settings: dict[str, Any]) -> None:
    """Replace the root logger's handlers according to settings. Creates the log directory."""
    config = build_logging_config(project_root, settings)
    Path(config["handlers"]["file"]["filename"]).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(config)
