"""Disk-level helpers for the HotCold status log.

:mod:`status_log` owns the single append-only ``log`` file in the
application's private files directory and its in-memory view mirror.
"""

from .status_log import DEFAULT_LOG_FILENAME, LogStore

__all__ = ["DEFAULT_LOG_FILENAME", "LogStore"]
