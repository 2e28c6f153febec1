"""Colors page: the color style registry of the open theme."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout, QHeaderView, QLineEdit, QMessageBox, QPushButton, QTableWidget,
    QTableWidgetItem, QVBoxLayout, QWidget,
)

from themesmith.core.theme_utils import color_usage
from themesmith.session import ThemeSession
from themesmith.ui.dialogs import ColorStyleDialog
from themesmith.ui.utils import swatch_icon

_MAX_TOOLTIP_SCOPES = 40


class ColorsPanel(QWidget):
    """List, search, add, edit and delete color styles."""

    message = Signal(str)

    def __init__(self, session: ThemeSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._setup_ui()
        self._session.theme_changed.connect(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        toolbar = QHBoxLayout()
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText("Search by name or value...")
        self._search_edit.textChanged.connect(lambda _text: self.refresh())
        self._add_btn = QPushButton("Add Color")
        self._add_btn.setProperty("role", "accent")
        self._add_btn.clicked.connect(self._add)
        self._edit_btn = QPushButton("Edit")
        self._edit_btn.clicked.connect(self._edit)
        self._delete_btn = QPushButton("Delete")
        self._delete_btn.clicked.connect(self._delete)
        toolbar.addWidget(self._search_edit, 1)
        toolbar.addWidget(self._add_btn)
        toolbar.addWidget(self._edit_btn)
        toolbar.addWidget(self._delete_btn)
        layout.addLayout(toolbar)

        self._table = QTableWidget()
        self._table.setColumnCount(3)
        self._table.setHorizontalHeaderLabels(["Name", "Value", "Used By"])
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setAlternatingRowColors(True)
        self._table.doubleClicked.connect(lambda _index: self._edit())
        layout.addWidget(self._table, 1)

    def refresh(self) -> None:
        theme = self._session.theme
        self._add_btn.setEnabled(theme is not None)
        self._table.setRowCount(0)
        if theme is None:
            return
        needle = self._search_edit.text().strip().lower()
        usage = color_usage(theme)
        rows = [
            (name, style.value)
            for name, style in theme.color_styles.items()
            if not needle or needle in name.lower() or needle in style.value.lower()
        ]
        self._table.setRowCount(len(rows))
        for row, (name, value) in enumerate(rows):
            scopes = usage.get(name, [])
            name_item = QTableWidgetItem(swatch_icon(value), name)
            name_item.setData(Qt.ItemDataRole.UserRole, name)
            used_item = QTableWidgetItem(str(len(scopes)))
            used_item.setToolTip(self._usage_tooltip(scopes))
            self._table.setItem(row, 0, name_item)
            self._table.setItem(row, 1, QTableWidgetItem(value))
            self._table.setItem(row, 2, used_item)

    @staticmethod
    def _usage_tooltip(scopes: list[str]) -> str:
        if not scopes:
            return "Not used in any scope"
        lines = scopes[:_MAX_TOOLTIP_SCOPES]
        if len(scopes) > _MAX_TOOLTIP_SCOPES:
            lines.append(f"... and {len(scopes) - _MAX_TOOLTIP_SCOPES} more")
        return "\n".join(lines)

    def _selected_name(self) -> str | None:
        row = self._table.currentRow()
        if row < 0:
            return None
        item = self._table.item(row, 0)
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _add(self) -> None:
        dialog = ColorStyleDialog(title="Add Color", parent=self)
        if not dialog.exec():
            return
        _ok, message = self._session.add_color_style(dialog.name(), dialog.value())
        self.message.emit(message)

    def _edit(self) -> None:
        name = self._selected_name()
        style = self._session.color_style(name)
        if style is None:
            self.message.emit("Select a color to edit")
            return
        dialog = ColorStyleDialog(style.name, style.value, title="Edit Color", parent=self)
        if not dialog.exec():
            return
        _ok, message = self._session.edit_color_style(style.name, dialog.name(), dialog.value())
        self.message.emit(message)

    def _delete(self) -> None:
        name = self._selected_name()
        if not name:
            self.message.emit("Select a color to delete")
            return
        scopes = self._session.color_usage(name)
        cascade = False
        if scopes:
            answer = QMessageBox.question(
                self,
                "Delete Color",
                f'"{name}" is used by {len(scopes)} scope(s). '
                "Remove it from those scopes and delete it?",
            )
            if answer != QMessageBox.StandardButton.Yes:
                return
            cascade = True
        _ok, message = self._session.delete_color_style(name, cascade=cascade)
        self.message.emit(message)
