"""Tests for themesmith.workers base and theme file workers."""

from __future__ import annotations

import json

import pytest

from themesmith.workers.base_worker import BaseWorker
from themesmith.workers.theme_io_worker import ThemeLoadWorker, ThemeSaveWorker


def _record(worker: BaseWorker) -> list[tuple[str, object]]:
    events: list[tuple[str, object]] = []
    worker.started.connect(lambda: events.append(("started", None)))
    worker.finished.connect(lambda result: events.append(("finished", result)))
    worker.error.connect(lambda message: events.append(("error", message)))
    worker.cancelled.connect(lambda: events.append(("cancelled", None)))
    return events


class TestBaseWorker:
    """Tests for the BaseWorker class."""

    def test_base_worker_cancel(self):
        """Test cancel sets the event."""
        worker = BaseWorker()
        assert worker.is_cancelled is False
        worker.cancel()
        assert worker.is_cancelled is True

    def test_base_worker_path(self, tmp_path):
        """Test the bound path is normalized to a Path."""
        assert BaseWorker().path is None
        assert BaseWorker(str(tmp_path / "a.json")).path == tmp_path / "a.json"

    def test_base_worker_signals_exist(self):
        """Test all expected signals are defined."""
        worker = BaseWorker()
        for name in ("started", "finished", "error", "cancelled"):
            assert hasattr(worker, name)

    def test_base_worker_run_not_implemented(self):
        """Test run() raises NotImplementedError."""
        with pytest.raises(NotImplementedError):
            BaseWorker().run()


class TestThemeLoadWorker:
    """Tests for ThemeLoadWorker."""

    def test_load_emits_result(self, tmp_path):
        """Test a readable theme is decoded and returned with warnings."""
        path = tmp_path / "night.json"
        path.write_text(
            json.dumps({"name": "Night", "colors": {"a": "#000000", "b": "bad"}}),
            encoding="utf-8",
        )
        worker = ThemeLoadWorker(path)
        events = _record(worker)
        worker.run()

        assert [kind for kind, _ in events] == ["started", "finished"]
        result = events[-1][1]
        assert result["path"] == path
        assert result["theme"].name == "Night"
        assert len(result["warnings"]) == 1

    def test_missing_file_emits_error(self, tmp_path):
        """Test a missing file is reported as a single-line message."""
        worker = ThemeLoadWorker(tmp_path / "missing.json")
        events = _record(worker)
        worker.run()

        assert events[-1][0] == "error"
        message = events[-1][1]
        assert "not found" in message
        assert "missing.json" in message
        assert "\n" not in message

    def test_bad_json_emits_error(self, tmp_path):
        """Test malformed JSON is reported, not raised."""
        path = tmp_path / "broken.json"
        path.write_text("{oops", encoding="utf-8")
        worker = ThemeLoadWorker(path)
        events = _record(worker)
        worker.run()

        assert events[-1] == ("error", "The file is not a valid theme JSON document. (broken.json)")

    def test_cancelled_before_finish(self, tmp_path):
        """Test a cancelled load does not deliver a result."""
        path = tmp_path / "t.json"
        path.write_text("{}", encoding="utf-8")
        worker = ThemeLoadWorker(path)
        events = _record(worker)
        worker.cancel()
        worker.run()

        assert [kind for kind, _ in events] == ["started", "cancelled"]


class TestThemeSaveWorker:
    """Tests for ThemeSaveWorker."""

    def test_save_writes_text(self, tmp_path):
        """Test the pre-encoded text is written as-is."""
        path = tmp_path / "out.json"
        worker = ThemeSaveWorker(path, '{\n  "name": "Out"\n}\n')
        events = _record(worker)
        worker.run()

        assert events[-1] == ("finished", path)
        assert path.read_text(encoding="utf-8") == '{\n  "name": "Out"\n}\n'

    def test_save_into_missing_directory_emits_error(self, tmp_path):
        """Test write failures are reported through the error signal."""
        path = tmp_path / "nope" / "out.json"
        worker = ThemeSaveWorker(path, "{}\n")
        events = _record(worker)
        worker.run()

        assert events[-1][0] == "error"
        assert not path.exists()

