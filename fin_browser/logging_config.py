from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

APP_NAME = "fin-browser"

# Dash's dev server logs every request at INFO through werkzeug
NOISY_LOGGERS = ("werkzeug",)


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("FIN_BROWSER_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure root logger for the app

    Modes:
    - JSON (default) in prod, one object per line with an "app" field
    - plain text (dev mode)

    Selection Order:
        1) force_format argument ("json" or "plain") if provided
        2) env var FIN_BROWSER_LOG_FORMAT
        3) default = "json"

    The level follows the same pattern: the level argument, then
    FIN_BROWSER_LOG_LEVEL, then INFO.
    """

    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv("FIN_BROWSER_LOG_FORMAT", "json").lower()

    root_level = _resolve_level(level)
    logger = logging.getLogger()
    logger.setLevel(root_level)

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
    else:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
            static_fields={"app": APP_NAME},
        )

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
