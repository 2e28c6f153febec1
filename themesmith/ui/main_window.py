"""Main application window with sidebar navigation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QThread
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QHBoxLayout, QMainWindow, QMessageBox, QStackedWidget, QVBoxLayout, QWidget,
)

from themesmith.core.constants import (
    SECTION_COLORS,
    SECTION_SEMANTIC_TOKEN_COLORS,
    SECTION_TOKEN_COLORS,
)
from themesmith.core.models import Theme
from themesmith.errors import classify_exception, format_error_for_user
from themesmith.session import ThemeSession
from themesmith.ui.colors_panel import ColorsPanel
from themesmith.ui.dialogs import prompt_open_file, prompt_save_path
from themesmith.ui.scope_panel import ScopePanel
from themesmith.ui.theme_panel import ThemePanel
from themesmith.ui.utils import safe_disconnect_multiple
from themesmith.ui.widgets.sidebar import SidebarNav
from themesmith.ui.widgets.status_strip import StatusStrip
from themesmith.workers.theme_io_worker import ThemeLoadResult, ThemeLoadWorker, ThemeSaveWorker

if TYPE_CHECKING:
    from themesmith.config.settings import AppSettings


class MainWindow(QMainWindow):
    """Main application window with sidebar navigation."""

    def __init__(self, settings: AppSettings, session: ThemeSession | None = None) -> None:
        super().__init__()
        self._settings = settings
        self._session = session or ThemeSession(self)
        self._load_worker: ThemeLoadWorker | None = None
        self._load_thread: QThread | None = None
        self._save_worker: ThemeSaveWorker | None = None
        self._save_thread: QThread | None = None
        self._save_theme: Theme | None = None
        self._save_revision = 0

        self.setWindowTitle("Themesmith")
        self.setMinimumSize(900, 600)
        self.resize(1180, 760)
        self.setObjectName("MainWindow")

        self._setup_layout()
        self._setup_menu()
        self._connect_session()
        self._restore_state()

    def _setup_layout(self) -> None:
        central = QWidget()
        central.setContentsMargins(0, 0, 0, 0)
        self.setCentralWidget(central)

        outer = QVBoxLayout(central)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        content_row = QHBoxLayout()
        content_row.setContentsMargins(0, 0, 0, 0)
        content_row.setSpacing(0)

        self._sidebar = SidebarNav()
        self._sidebar.page_changed.connect(self._on_nav_changed)
        content_row.addWidget(self._sidebar)

        self._stack = QStackedWidget()
        self._theme_panel = ThemePanel(self._session)
        self._colors_panel = ColorsPanel(self._session)
        self._ui_colors_panel = ScopePanel(self._session, SECTION_COLORS)
        self._token_colors_panel = ScopePanel(self._session, SECTION_TOKEN_COLORS)
        self._semantic_panel = ScopePanel(self._session, SECTION_SEMANTIC_TOKEN_COLORS)
        for panel in (
            self._theme_panel,
            self._colors_panel,
            self._ui_colors_panel,
            self._token_colors_panel,
            self._semantic_panel,
        ):
            self._stack.addWidget(panel)
        content_row.addWidget(self._stack, 1)
        outer.addLayout(content_row, 1)

        self._status_strip = StatusStrip()
        outer.addWidget(self._status_strip)

        self._theme_panel.set_themes_dir(self._settings.themes_dir)

    def _on_nav_changed(self, index: int) -> None:
        self._stack.setCurrentIndex(index)

    def _setup_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        for text, shortcut, handler in (
            ("&New Theme", QKeySequence.StandardKey.New, self._new_theme),
            ("&Open...", QKeySequence.StandardKey.Open, self._open_dialog),
            ("&Save", QKeySequence.StandardKey.Save, self._save),
            ("Save &As...", QKeySequence.StandardKey.SaveAs, self._save_as),
        ):
            action = QAction(text, self)
            action.setShortcut(shortcut)
            action.triggered.connect(handler)
            file_menu.addAction(action)
        self._recent_menu = file_menu.addMenu("Open &Recent")
        self._recent_menu.aboutToShow.connect(self._rebuild_recent_menu)
        self._rebuild_recent_menu()
        file_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = self.menuBar().addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _rebuild_recent_menu(self) -> None:
        self._recent_menu.clear()
        recent = self._settings.recent_files
        if not recent:
            placeholder = QAction("No recent themes", self._recent_menu)
            placeholder.setEnabled(False)
            self._recent_menu.addAction(placeholder)
            return
        for path in recent:
            action = QAction(Path(path).name, self._recent_menu)
            action.setToolTip(path)
            action.triggered.connect(lambda _checked=False, p=path: self.open_path(Path(p)))
            self._recent_menu.addAction(action)

    def _connect_session(self) -> None:
        for panel in (
            self._theme_panel,
            self._colors_panel,
            self._ui_colors_panel,
            self._token_colors_panel,
            self._semantic_panel,
        ):
            panel.message.connect(self._notify)
        self._theme_panel.open_requested.connect(self.open_path)
        self._session.dirty_changed.connect(lambda _dirty: self._update_file_label())
        self._session.file_path_changed.connect(lambda _path: self._update_file_label())
        self._update_file_label()

    def _notify(self, text: str) -> None:
        self._status_strip.show_message(text, 4000)

    def _update_file_label(self) -> None:
        path = self._session.file_path
        self._status_strip.set_file(str(path) if path else "", self._session.is_dirty)
        title = path.name if path else (self._session.theme.name if self._session.theme else "")
        suffix = " *" if self._session.is_dirty else ""
        self.setWindowTitle(f"{title}{suffix} - Themesmith" if title else "Themesmith")

    # -- file actions --

    def _confirm_discard(self) -> bool:
        if not self._session.is_dirty:
            return True
        answer = QMessageBox.question(
            self, "Unsaved Changes", "Discard unsaved changes to the current theme?"
        )
        return answer == QMessageBox.StandardButton.Yes

    def _new_theme(self) -> None:
        if not self._confirm_discard():
            return
        self._session.new_theme()
        self._notify("New theme created")

    def _open_dialog(self) -> None:
        if not self._confirm_discard():
            return
        try:
            picked = prompt_open_file(self, str(self._settings.themes_dir))
        except (OSError, ValueError) as exc:
            self._show_error("Open Theme", format_error_for_user(classify_exception(exc)))
            return
        if picked is None:
            return
        self._cancel_load()
        path, text = picked
        try:
            warnings = self._session.load_text(text, path)
        except ValueError as exc:
            self._show_error("Open Theme", format_error_for_user(classify_exception(exc, path)))
            return
        self._after_load(path, warnings)

    def open_path(self, path: Path) -> None:
        if self._load_thread and self._load_thread.isRunning():
            self._notify("A theme is already loading")
            return
        if not self._confirm_discard():
            return
        self._notify(f"Loading {path.name}...")
        self._load_worker = ThemeLoadWorker(path)
        self._load_thread = QThread()
        self._load_worker.moveToThread(self._load_thread)
        self._load_thread.started.connect(self._load_worker.run)
        self._load_worker.finished.connect(self._on_load_done)
        self._load_worker.error.connect(self._on_load_error)
        self._load_worker.finished.connect(self._load_thread.quit)
        self._load_worker.error.connect(self._load_thread.quit)
        self._load_worker.cancelled.connect(self._load_thread.quit)
        self._load_thread.finished.connect(self._cleanup_load)
        self._load_thread.start()

    def _on_load_done(self, result: ThemeLoadResult) -> None:
        if self._load_worker is not None and self._load_worker.is_cancelled:
            return
        self._session.adopt(result["theme"], result["path"], result["warnings"])
        self._after_load(result["path"], result["warnings"])

    def _cancel_load(self) -> None:
        """Drop the result of a background load that is still running."""
        if self._load_worker and self._load_thread and self._load_thread.isRunning():
            self._load_worker.cancel()
            self._notify(f"Cancelled loading {self._load_worker.path.name}")

    def _on_load_error(self, message: str) -> None:
        self._show_error("Open Theme", message)

    def _after_load(self, path: Path, warnings: list[str]) -> None:
        self._settings.add_recent_file(str(path))
        if warnings:
            self._notify(f"Loaded {path.name} with {len(warnings)} warning(s)")
        else:
            self._notify(f"Loaded {path.name}")

    def _save(self) -> None:
        if self._session.theme is None:
            self._notify("No theme to save")
            return
        if self._session.file_path is None:
            self._save_as()
            return
        self._start_save(self._session.file_path)

    def _save_as(self) -> None:
        if self._session.theme is None:
            self._notify("No theme to save")
            return
        start = self._session.file_path or (
            self._settings.themes_dir / f"{self._session.theme.name}.json"
        )
        path = prompt_save_path(self, str(start))
        if path is not None:
            self._start_save(path)

    def _start_save(self, path: Path) -> None:
        if self._save_thread and self._save_thread.isRunning():
            self._notify("A save is already in progress")
            return
        text = self._session.encode()
        self._save_theme = self._session.theme
        self._save_revision = self._session.revision
        self._save_worker = ThemeSaveWorker(path, text)
        self._save_thread = QThread()
        self._save_worker.moveToThread(self._save_thread)
        self._save_thread.started.connect(self._save_worker.run)
        self._save_worker.finished.connect(self._on_save_done)
        self._save_worker.error.connect(self._on_save_error)
        self._save_worker.finished.connect(self._save_thread.quit)
        self._save_worker.error.connect(self._save_thread.quit)
        self._save_thread.finished.connect(self._cleanup_save)
        self._save_thread.start()

    def _on_save_done(self, path: Path) -> None:
        self._settings.add_recent_file(str(path))
        self._theme_panel.reload_files()
        if self._session.theme is not self._save_theme:
            self._notify(f"Saved {path.name}")
            return
        self._session.mark_saved(path, self._save_revision)
        if self._session.is_dirty:
            self._notify(f"Saved {path.name}; later edits are not saved yet")
        else:
            self._notify(f"Saved {path.name}")

    def _on_save_error(self, message: str) -> None:
        self._show_error("Save Theme", message)

    def _show_error(self, title: str, message: str) -> None:
        self._notify(message)
        QMessageBox.critical(self, title, message)

    def _cleanup_load(self) -> None:
        if self._load_worker and self._load_thread:
            safe_disconnect_multiple([
                (self._load_worker.finished, self._on_load_done),
                (self._load_worker.error, self._on_load_error),
                (self._load_worker.finished, self._load_thread.quit),
                (self._load_worker.error, self._load_thread.quit),
                (self._load_worker.cancelled, self._load_thread.quit),
            ])
        if self._load_worker:
            self._load_worker.deleteLater()
            self._load_worker = None
        if self._load_thread:
            self._load_thread.deleteLater()
            self._load_thread = None

    def _cleanup_save(self) -> None:
        if self._save_worker and self._save_thread:
            safe_disconnect_multiple([
                (self._save_worker.finished, self._on_save_done),
                (self._save_worker.error, self._on_save_error),
                (self._save_worker.finished, self._save_thread.quit),
                (self._save_worker.error, self._save_thread.quit),
            ])
        if self._save_worker:
            self._save_worker.deleteLater()
            self._save_worker = None
        if self._save_thread:
            self._save_thread.deleteLater()
            self._save_thread = None
        self._save_theme = None

    def _show_about(self) -> None:
        from themesmith import __version__
        QMessageBox.about(
            self, "About Themesmith",
            f"Themesmith v{__version__}\n\n"
            "A PySide6 desktop editor for VS Code color themes.\n\n"
            "Features:\n"
            "  - Named, deduplicated color styles shared across the theme\n"
            "  - UI colors, token colors and semantic token colors\n"
            "  - Usage tracking: see every scope that uses a color\n"
            "  - Stable, diff-friendly JSON output"
        )

    def _restore_state(self) -> None:
        geo = self._settings.window_geometry
        if geo:
            self.restoreGeometry(geo)

    def closeEvent(self, event) -> None:
        if not self._confirm_discard():
            event.ignore()
            return
        self._cancel_load()
        for thread in (self._load_thread, self._save_thread):
            if thread and thread.isRunning():
                thread.quit()
                thread.wait()
        self._cleanup_load()
        self._cleanup_save()
        self._settings.window_geometry = self.saveGeometry()
        super().closeEvent(event)
