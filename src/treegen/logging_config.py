"""Process-wide logging setup for the treegen command."""

from __future__ import annotations

import logging

from .config import LoggingSettings

_CONFIGURED = False


def configure_logging(settings: LoggingSettings, *, level: str | None = None) -> None:
    """
    Configure the root logger to write to stderr.

    ``level`` overrides the configured level (used by --log-level). Calling
    this again only adjusts the level.
    """
    global _CONFIGURED
    effective = getattr(logging, (level or settings.level).upper())
    if _CONFIGURED:
        logging.getLogger().setLevel(effective)
        return

    logging.basicConfig(level=effective, format=settings.format)
    _CONFIGURED = True
