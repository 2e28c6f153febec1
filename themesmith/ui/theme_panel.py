"""Theme page: metadata of the open theme and the theme folder listing."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QFormLayout, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget,
)

from themesmith.core.constants import THEME_TYPES
from themesmith.core.file_service import list_theme_files
from themesmith.session import ThemeSession


class ThemePanel(QWidget):
    """Edit theme name, type and semantic highlighting; pick files to open."""

    open_requested = Signal(object)     # Path
    message = Signal(str)

    def __init__(self, session: ThemeSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._themes_dir: Path | None = None
        self._setup_ui()
        self._session.theme_changed.connect(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        meta_group = QGroupBox("Theme")
        meta_form = QFormLayout(meta_group)
        self._name_edit = QLineEdit()
        self._name_edit.editingFinished.connect(self._apply_name)
        self._type_combo = QComboBox()
        for theme_type in THEME_TYPES:
            self._type_combo.addItem(theme_type, theme_type)
        self._type_combo.currentIndexChanged.connect(self._apply_type)
        self._semantic_check = QCheckBox("Enable semantic highlighting")
        self._semantic_check.toggled.connect(self._apply_semantic)
        self._summary_label = QLabel("")
        self._summary_label.setObjectName("StatusDetail")
        meta_form.addRow("Name:", self._name_edit)
        meta_form.addRow("Type:", self._type_combo)
        meta_form.addRow("", self._semantic_check)
        meta_form.addRow("Contents:", self._summary_label)
        layout.addWidget(meta_group)

        files_group = QGroupBox("Theme Folder")
        files_layout = QVBoxLayout(files_group)
        folder_row = QHBoxLayout()
        self._folder_label = QLabel("")
        self._folder_label.setWordWrap(True)
        self._refresh_btn = QPushButton("Refresh")
        self._refresh_btn.clicked.connect(self.reload_files)
        folder_row.addWidget(self._folder_label, 1)
        folder_row.addWidget(self._refresh_btn)
        files_layout.addLayout(folder_row)
        self._file_list = QListWidget()
        self._file_list.itemDoubleClicked.connect(self._on_file_activated)
        files_layout.addWidget(self._file_list, 1)
        layout.addWidget(files_group, 1)

        warnings_group = QGroupBox("Load Warnings")
        warnings_layout = QVBoxLayout(warnings_group)
        self._warning_list = QListWidget()
        warnings_layout.addWidget(self._warning_list)
        layout.addWidget(warnings_group)

    def set_themes_dir(self, path: Path) -> None:
        self._themes_dir = path
        self._folder_label.setText(str(path))
        self.reload_files()

    def reload_files(self) -> None:
        self._file_list.clear()
        if self._themes_dir is None:
            return
        try:
            names = list_theme_files(self._themes_dir)
        except OSError as exc:
            self.message.emit(f"Could not list {self._themes_dir}: {exc}")
            return
        for name in names:
            item = QListWidgetItem(name)
            item.setData(Qt.ItemDataRole.UserRole, str(self._themes_dir / name))
            self._file_list.addItem(item)

    def refresh(self) -> None:
        theme = self._session.theme
        enabled = theme is not None
        for widget in (self._name_edit, self._type_combo, self._semantic_check):
            widget.setEnabled(enabled)
        self._warning_list.clear()
        self._warning_list.addItems(self._session.warnings)
        if theme is None:
            self._summary_label.setText("No theme loaded")
            return

        self._name_edit.blockSignals(True)
        self._type_combo.blockSignals(True)
        self._semantic_check.blockSignals(True)
        self._name_edit.setText(theme.name)
        self._type_combo.setCurrentIndex(max(0, self._type_combo.findData(theme.type)))
        self._semantic_check.setChecked(theme.semantic_highlighting)
        self._name_edit.blockSignals(False)
        self._type_combo.blockSignals(False)
        self._semantic_check.blockSignals(False)

        semantic_count = len(theme.semantic_token_colors or {})
        self._summary_label.setText(
            f"{len(theme.color_styles)} colors | {len(theme.colors)} UI colors | "
            f"{len(theme.token_colors)} token rules | {semantic_count} semantic tokens"
        )

    def _apply_name(self) -> None:
        if self._session.theme is None:
            return
        ok, message = self._session.set_name(self._name_edit.text())
        if not ok:
            self.message.emit(message)
            self._name_edit.setText(self._session.theme.name)

    def _apply_type(self) -> None:
        if self._session.theme is None:
            return
        _ok, message = self._session.set_type(self._type_combo.currentData())
        self.message.emit(message)

    def _apply_semantic(self, checked: bool) -> None:
        if self._session.theme is not None:
            self._session.set_semantic_highlighting(checked)

    def _on_file_activated(self, item: QListWidgetItem) -> None:
        path = item.data(Qt.ItemDataRole.UserRole)
        if path:
            self.open_requested.emit(Path(path))
