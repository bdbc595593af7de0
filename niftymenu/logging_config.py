"""Console logging setup for hosts embedding niftymenu.

Library modules only create loggers; call :func:`setup_logging` once from
the host application if their records should be shown.
"""

from __future__ import annotations

import logging
import logging.config
import os

__all__ = ["setup_logging"]

LOG_LEVEL_ENV = "NIFTYMENU_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def _resolve_level(level: str | int | None) -> str:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)
    if isinstance(level, int):
        level = logging.getLevelName(level)
    name = str(level).strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else DEFAULT_LEVEL


def setup_logging(level: str | int | None = None) -> None:
    """Route ``niftymenu`` records to stderr at ``level`` (env var fallback)."""
    resolved = _resolve_level(level)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "simple",
                    "level": resolved,
                },
            },
            "loggers": {
                "niftymenu": {
                    "handlers": ["console"],
                    "level": resolved,
                    "propagate": False,
                },
            },
        }
    )
