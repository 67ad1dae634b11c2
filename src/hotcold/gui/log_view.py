"""Read-only text widget used as the status log display surface."""

from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QWidget


class LogTextView(QPlainTextEdit):
    """
    Plain-text log view with raw ``append``/``set_text`` sinks.

    ``QPlainTextEdit.appendPlainText`` always starts a new paragraph, so
    :meth:`append` inserts at the end instead; callers own the newlines.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.WidgetWidth)
        self.setUndoRedoEnabled(False)

    def append(self, text: str) -> None:
        cursor = self.textCursor()
        cursor.movePosition(QTextCursor.End)
        cursor.insertText(text)
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    def set_text(self, text: str) -> None:
        self.setPlainText(text)
        self.moveCursor(QTextCursor.End)
