# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for readyprobe."""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "readyprobe"


def _default_level() -> str:
    return os.getenv("READYPROBE_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """
    Configure logging for CLI use.

    The root handler is installed once via ``basicConfig``; the level is applied
    to the package logger so embedding orchestrators keep their own root level.
    """
    effective_level = getattr(logging, (level or _default_level()).upper(), logging.WARNING)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)


__all__ = ["PACKAGE_LOGGER", "setup_logging"]
