"""QApplication bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from themesmith import __version__
from themesmith.config.settings import AppSettings
from themesmith.session import ThemeSession
from themesmith.ui.main_window import MainWindow


def _configure_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("themesmith")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themesmith.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def run_app() -> int:
    """Initialize and run the application."""
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Themesmith")
    app.setOrganizationName("Themesmith")
    settings = AppSettings()
    logger = _configure_logger(settings)
    logger.info("startup version=%s themes_dir=%s", __version__, settings.themes_dir)

    session = ThemeSession()
    window = MainWindow(settings, session=session)
    window.show()

    last_path = settings.last_theme_path
    if last_path and Path(last_path).is_file():
        window.open_path(Path(last_path))
    elif last_path:
        logger.warning("last theme not found: %s", last_path)

    exit_code = app.exec()
    return exit_code
