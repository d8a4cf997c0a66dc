"""Logging setup for addon_updater.

The CLI calls `configure_logging` once at start-up; library modules only ask
for loggers through `get_logger` and never touch handlers themselves.
"""

from __future__ import annotations

import logging
import os
from typing import Optional


def configure_logging(level: str | int | None = None) -> None:
    """Configure the root logger from ``level`` or ``ADDONS_LOG_LEVEL``.

    Unknown level names fall back to INFO.
    """
    if level is None:
        level = os.environ.get("ADDONS_LOG_LEVEL", "INFO")

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "addon_updater")


__all__ = ["configure_logging", "get_logger"]
