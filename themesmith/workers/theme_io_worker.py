"""Workers that read and write theme files off the GUI thread."""

from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from themesmith.core.file_service import load_theme_file, write_text
from themesmith.core.models import Theme
from themesmith.workers.base_worker import BaseWorker


class ThemeLoadResult(TypedDict):
    path: Path
    theme: Theme
    warnings: list[str]


class ThemeLoadWorker(BaseWorker):
    """Reads and decodes a theme file in a background thread."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path)

    def run(self) -> None:
        self.started.emit()
        try:
            theme, warnings = load_theme_file(self._path)
        except Exception as exc:
            self._emit_failure("load", exc)
            return
        if self._emit_cancelled_if_requested():
            return
        result: ThemeLoadResult = {"path": self._path, "theme": theme, "warnings": warnings}
        self.finished.emit(result)


class ThemeSaveWorker(BaseWorker):
    """Writes already-encoded theme text in a background thread.

    The text is produced on the thread that owns the Theme, so this worker
    never reads the live model. A save is never cancelled once started.
    """

    def __init__(self, path: str | Path, text: str) -> None:
        super().__init__(path)
        self._text = text

    def run(self) -> None:
        self.started.emit()
        try:
            write_text(self._path, self._text)
        except Exception as exc:
            self._emit_failure("save", exc)
            return
        self.finished.emit(self._path)
