"""Logging configuration for the package."""

from __future__ import annotations

import logging
import sys

from firestore_cache.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging to stdout.

    Level is DEBUG when settings.debug is True (cache HIT/MISS/SET lines are
    logged at DEBUG), otherwise INFO.

    Args:
        settings: Settings to read; get_settings() when omitted.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
