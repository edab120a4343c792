"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers under the ``buttonlock`` namespace.
    - Allow optional verbose/debug modes for the command line.

Inputs/Outputs:
    - Inputs: module name and verbosity settings.
    - Outputs: configured `logging.Logger` instances.

Public contracts:
    - `get_logger(name)`: Return a logger below the package logger.
    - `configure_logging(level)`: Install a stderr handler once.

Notes/Edge cases:
    - Logging configuration is idempotent; a second call only adjusts the
      level of the package logger.
    - Library code never configures handlers on import.

Dependencies:
    - Python `logging` module.
"""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

__all__ = ["PACKAGE_LOGGER", "get_logger", "configure_logging"]

PACKAGE_LOGGER = "buttonlock"

_configured = False


def _dict_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            PACKAGE_LOGGER: {"level": level, "handlers": ["console"], "propagate": False},
        },
    }


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` nested under the package logger."""

    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def configure_logging(level: str = "WARNING") -> None:
    """Configure package logging once.

    Subsequent calls only update the level so repeated CLI invocations in one
    process (tests) do not stack handlers.
    """

    global _configured
    level = level.upper()
    if _configured:
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)
        return
    dictConfig(_dict_config(level))
    _configured = True
