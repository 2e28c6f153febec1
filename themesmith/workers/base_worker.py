"""Base worker for theme file operations run off the GUI thread."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Event

from PySide6.QtCore import QObject, Signal

from themesmith.errors import classify_exception, format_error_for_user

logger = logging.getLogger(__name__)


class BaseWorker(QObject):
    """File worker bound to one theme path, using the moveToThread pattern.

    Usage:
        worker = ThemeLoadWorker(path)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.start()

    Exactly one of ``finished``, ``error`` or ``cancelled`` follows ``started``.
    """

    started = Signal()
    finished = Signal(object)           # result data
    error = Signal(str)                 # single-line error message
    cancelled = Signal()

    def __init__(self, path: str | Path | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._path = Path(path) if path is not None else None
        self._cancel_event = Event()

    @property
    def path(self) -> Path | None:
        return self._path

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _emit_failure(self, action: str, exc: Exception) -> None:
        logger.warning("failed to %s theme %s: %s", action, self._path, exc)
        self.error.emit(format_error_for_user(classify_exception(exc, self._path)))

    def _emit_cancelled_if_requested(self) -> bool:
        if self.is_cancelled:
            logger.info("theme file operation cancelled path=%s", self._path)
            self.cancelled.emit()
            return True
        return False

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError
