"""Append-only status log backed by a single file in private storage.

The log file is the durable record; the in-memory view is rebuilt from it on
:meth:`LogStore.open` and kept in step with every :meth:`LogStore.append`.
I/O failures never propagate to callers: they degrade the store to
view-only mode and leave a diagnostic line in the view.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILENAME = "log"
LOG_ENCODING = "utf-8"


class LogViewSink(Protocol):
    """Anything that can mirror the log text (see :class:`~hotcold.core.view_sync.ViewSync`)."""

    def render(self, text: str) -> None: ...

    def append(self, text: str) -> None: ...

    def clear(self) -> None: ...


class LogStore:
    """
    Write-through status log with an in-memory mirror.

    Lifecycle mirrors the host window: :meth:`open` on resume, :meth:`close`
    on suspend. Every persisted append is written and flushed immediately so
    the file survives an abrupt stop without an explicit shutdown step.
    """

    def __init__(
        self,
        files_dir: Path,
        filename: str = DEFAULT_LOG_FILENAME,
        *,
        view: LogViewSink | None = None,
    ) -> None:
        self._files_dir = Path(files_dir)
        self._path = self._files_dir / filename
        self._view = view
        self._text = ""
        self._handle: Optional[BinaryIO] = None
        self._is_open = False
        self._writable = False

    # ------------------------------------------------------------ properties
    @property
    def path(self) -> Path:
        return self._path

    @property
    def text(self) -> str:
        """Current contents of the in-memory log view."""
        return self._text

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_writable(self) -> bool:
        """True while persisted appends still reach the log file."""
        return self._is_open and self._writable

    # ------------------------------------------------------------ operations
    def read_log(self) -> str:
        """
        Return the whole log file as text.

        A missing, empty or unreadable file reads as ``""``.
        """
        try:
            if not self._path.exists():
                return ""
            data = self._path.read_bytes()
        except Exception as exc:
            logger.warning("Treating unreadable log %s as empty: %s", self._path, exc)
            return ""
        return data.decode(LOG_ENCODING, errors="replace")

    def open(self) -> str:
        """
        Replay the log file into the view and prepare for appending.

        The file itself is only created by the first persisted append.
        """
        if self._is_open:
            self._release_handle()

        contents = self.read_log()
        self._set_text(contents)
        self._is_open = True

        try:
            self._files_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Cannot prepare log directory %s: %s", self._files_dir, exc)
            self._writable = False
            self.append("\nFailed to open status log for append.", persist=False)
            return contents

        self._writable = True
        logger.debug("Opened status log %s (%d chars)", self._path, len(contents))
        return contents

    def append(self, message: str, persist: bool = True) -> None:
        """
        Add ``message`` to the view and, when ``persist`` is set, to the file.

        Callers add their own trailing newline.
        """
        self._append_text(message)
        if not persist or not self.is_writable:
            return

        try:
            handle = self._acquire_handle()
            handle.write(message.encode(LOG_ENCODING))
            handle.flush()
        except Exception as exc:
            logger.error("Failed to write status log %s: %s", self._path, exc)
            self._release_handle()
            self._writable = False
            self._append_text(f"\nFailed to write status log:\n{exc!r}")

    def clear(self, delete_file: bool = False) -> None:
        """Empty the view; with ``delete_file`` also remove the log file."""
        self._text = ""
        if self._view is not None:
            self._view.clear()
        if not delete_file:
            return

        # The next persisted append reopens the handle and recreates the file.
        self._release_handle()
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to delete status log %s: %s", self._path, exc)
        else:
            logger.info("Deleted status log %s", self._path)

    def close(self) -> None:
        """Clear the view and release the append handle (best effort)."""
        self.clear(delete_file=False)
        self._release_handle()
        self._is_open = False
        self._writable = False

    # --------------------------------------------------------------- helpers
    def _acquire_handle(self) -> BinaryIO:
        if self._handle is None:
            self._handle = self._path.open("ab")
        return self._handle

    def _release_handle(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is None:
            return
        try:
            handle.close()
        except Exception:
            logger.debug("Ignoring error while closing %s", self._path, exc_info=True)

    def _set_text(self, text: str) -> None:
        self._text = text
        if self._view is not None:
            self._view.render(text)

    def _append_text(self, text: str) -> None:
        self._text += text
        if self._view is not None:
            self._view.append(text)
