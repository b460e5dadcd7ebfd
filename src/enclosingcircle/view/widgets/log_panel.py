"""
Log Panel
Shows the application log inside the main window.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QPlainTextEdit, QWidget


class _LogBridge(QObject):
    message = Signal(str)


class QtLogHandler(logging.Handler):
    """logging.Handler that re-emits formatted records as a Qt signal."""
    def __init__(self) -> None:
        super().__init__()
        self.bridge = _LogBridge()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.bridge.message.emit(msg)


class LogPanel(QPlainTextEdit):
    MAX_LINES = 500

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumBlockCount(self.MAX_LINES)
        self.handler = QtLogHandler()
        self.handler.bridge.message.connect(self.appendPlainText)
