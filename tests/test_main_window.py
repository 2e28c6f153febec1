"""Tests for MainWindow file actions."""

from __future__ import annotations

import json

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtGui import QCloseEvent

from themesmith.config.settings import AppSettings
from themesmith.core.models import Theme
from themesmith.ui.main_window import MainWindow
from themesmith.workers.theme_io_worker import ThemeLoadWorker

SAMPLE = json.dumps({"name": "Window Sample", "colors": {"editor.background": "#1e1e1e"}})


class _RunningThread:
    """Stand-in for a QThread that is still running."""

    def __init__(self):
        self.calls = []

    def isRunning(self):
        return True

    def quit(self):
        self.calls.append("quit")

    def wait(self):
        self.calls.append("wait")

    def deleteLater(self):
        self.calls.append("deleteLater")


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """AppSettings backed by an ini file with app data under tmp_path."""
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    qsettings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qsettings)


@pytest.fixture
def window(qapp, settings, monkeypatch):
    """A MainWindow whose error boxes are recorded instead of shown."""
    window = MainWindow(settings)
    window.errors = []

    class RecordingMessageBox:
        @staticmethod
        def critical(_parent, title, message):
            window.errors.append((title, message))

    monkeypatch.setattr("themesmith.ui.main_window.QMessageBox", RecordingMessageBox)
    return window


class TestOpenDialog:
    """Tests for File > Open."""

    def test_non_utf8_file_is_reported(self, window, tmp_path, monkeypatch):
        """Test a file that is not UTF-8 shows an error instead of raising."""
        bad = tmp_path / "latin1.json"
        bad.write_bytes(b'{"name": "Caf\xff"}')

        class PickingFileDialog:
            @staticmethod
            def getOpenFileName(*_args):
                return str(bad), ""

        monkeypatch.setattr("themesmith.ui.dialogs.QFileDialog", PickingFileDialog)
        window._open_dialog()

        assert len(window.errors) == 1
        title, message = window.errors[0]
        assert title == "Open Theme"
        assert "could not be read" in message
        assert window._session.theme is None


class TestSaveDone:
    """Tests for finishing a background save."""

    def test_edit_during_save_stays_dirty(self, window, tmp_path):
        """Test a save that lands after another edit keeps the window dirty."""
        session = window._session
        session.load_text(SAMPLE, tmp_path / "a.json")
        session.set_name("Before save")
        window._save_theme = session.theme
        window._save_revision = session.revision
        session.set_name("During save")

        window._on_save_done(tmp_path / "a.json")
        assert session.is_dirty is True
        assert window.windowTitle().startswith("a.json *")

    def test_save_of_replaced_theme_leaves_new_theme_alone(self, window, tmp_path):
        """Test a save that lands after New does not mark the new theme saved."""
        session = window._session
        session.load_text(SAMPLE, tmp_path / "a.json")
        window._save_theme = session.theme
        window._save_revision = session.revision
        session.new_theme()

        window._on_save_done(tmp_path / "a.json")
        assert session.is_dirty is True
        assert session.file_path is None

    def test_clean_save_clears_dirty(self, window, tmp_path):
        """Test a save with no later edits clears the dirty flag."""
        session = window._session
        session.load_text(SAMPLE, tmp_path / "a.json")
        session.set_name("Saved name")
        window._save_theme = session.theme
        window._save_revision = session.revision

        window._on_save_done(tmp_path / "b.json")
        assert session.is_dirty is False
        assert session.file_path == tmp_path / "b.json"


class TestLoadCancel:
    """Tests for cancelling a background load."""

    def test_cancelled_result_is_ignored(self, window, tmp_path):
        """Test a load cancelled by a newer open does not replace the theme."""
        window._session.load_text(SAMPLE, tmp_path / "current.json")
        current = window._session.theme
        worker = ThemeLoadWorker(tmp_path / "slow.json")
        window._load_worker = worker
        window._load_thread = _RunningThread()

        window._cancel_load()
        assert worker.is_cancelled is True
        other = Theme(name="Other")
        window._on_load_done({"path": tmp_path / "slow.json", "theme": other, "warnings": []})
        assert window._session.theme is current
        window._load_worker = None
        window._load_thread = None

    def test_close_cancels_running_load(self, window, tmp_path):
        """Test closing the window cancels the load before waiting on its thread."""
        worker = ThemeLoadWorker(tmp_path / "slow.json")
        thread = _RunningThread()
        window._load_worker = worker
        window._load_thread = thread

        event = QCloseEvent()
        window.closeEvent(event)
        assert worker.is_cancelled is True
        assert thread.calls[:2] == ["quit", "wait"]
        assert window._load_worker is None
        assert window._load_thread is None


class TestRecentMenu:
    """Tests for File > Open Recent."""

    def test_placeholder_when_empty(self, window):
        """Test an empty history shows one disabled entry."""
        window._rebuild_recent_menu()
        actions = window._recent_menu.actions()
        assert [action.text() for action in actions] == ["No recent themes"]
        assert actions[0].isEnabled() is False

    def test_lists_recent_files_and_opens_them(self, window, settings, tmp_path, monkeypatch):
        """Test recent files appear newest first and open when triggered."""
        settings.add_recent_file(str(tmp_path / "old.json"))
        settings.add_recent_file(str(tmp_path / "new.json"))
        opened = []
        monkeypatch.setattr(window, "open_path", opened.append)

        window._rebuild_recent_menu()
        actions = window._recent_menu.actions()
        assert [action.text() for action in actions] == ["new.json", "old.json"]
        assert actions[0].toolTip() == str(tmp_path / "new.json")

        actions[1].trigger()
        assert opened == [tmp_path / "old.json"]
