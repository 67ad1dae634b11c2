"""Opt-in debug switch and logging setup."""

from __future__ import annotations

import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_enabled() -> bool:
    """Return True when ``HOTCOLD_DEBUG`` asks for verbose output."""
    return os.getenv("HOTCOLD_DEBUG", "").strip().lower() in _TRUTHY


def configure_logging(verbose: bool = False) -> None:
    """Route module loggers to stderr at INFO (DEBUG when verbose)."""
    level = logging.DEBUG if verbose or debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
