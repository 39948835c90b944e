"""Logging configuration for the Farm Ledger API."""

from __future__ import annotations

import logging.config
from pathlib import Path
from typing import Any

from farm_ledger.core.settings import Settings, settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config(config: Settings) -> dict[str, Any]:
    """Return a ``dictConfig`` mapping for the given settings.

    Console output is always enabled. When ``LOG_DIR`` is set, ``combined.log``
    receives every record and ``error.log`` only errors.
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["combined_file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(log_dir / "combined.log"),
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(log_dir / "error.log"),
            "level": "ERROR",
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "loggers": {
            "farm_ledger": {
                "handlers": list(handlers),
                "level": config.log_level.upper(),
                "propagate": False,
            },
        },
    }


def configure_logging(config: Settings | None = None) -> None:
    """Install the application's logging handlers."""
    logging.config.dictConfig(build_logging_config(config or settings))
