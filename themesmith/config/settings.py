"""Application settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

MAX_RECENT_FILES = 8


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings or QSettings("Themesmith", "Themesmith")

    # -- theme files --

    @property
    def themes_dir(self) -> Path:
        raw = self._qs.value("files/themes_dir", "", type=str)
        value = (raw or "").strip()
        if value:
            return Path(value)
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @themes_dir.setter
    def themes_dir(self, value: str | Path) -> None:
        self._qs.setValue("files/themes_dir", str(value).strip())

    @property
    def last_theme_path(self) -> str:
        return self._qs.value("files/last_theme_path", "", type=str)

    @last_theme_path.setter
    def last_theme_path(self, value: str) -> None:
        self._qs.setValue("files/last_theme_path", value)

    @property
    def recent_files(self) -> list[str]:
        raw = self._qs.value("files/recent", [])
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str) and item][:MAX_RECENT_FILES]

    def add_recent_file(self, path: str) -> None:
        cleaned = (path or "").strip()
        if not cleaned:
            return
        recent = [item for item in self.recent_files if item != cleaned]
        recent.insert(0, cleaned)
        self._qs.setValue("files/recent", recent[:MAX_RECENT_FILES])
        self.last_theme_path = cleaned

    # -- window geometry --

    @property
    def window_geometry(self) -> bytes | None:
        return self._qs.value("ui/window_geometry")

    @window_geometry.setter
    def window_geometry(self, value: bytes) -> None:
        self._qs.setValue("ui/window_geometry", value)

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        import os
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themesmith"
