"""Scope pages: UI colors, token colors and semantic token colors."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout, QHeaderView, QLineEdit, QMessageBox, QPushButton, QTableWidget,
    QTableWidgetItem, QVBoxLayout, QWidget,
)

from themesmith.core.constants import (
    SECTION_COLORS,
    SECTION_SEMANTIC_TOKEN_COLORS,
    SECTION_TOKEN_COLORS,
    SECTIONS,
)
from themesmith.core.models import ColorStyle
from themesmith.session import ThemeSession
from themesmith.ui.dialogs import ScopeEntryDialog
from themesmith.ui.utils import swatch_icon

_COLUMNS = {
    SECTION_COLORS: ["Scope", "Color"],
    SECTION_TOKEN_COLORS: ["Scope", "Foreground", "Background", "Font Style"],
    SECTION_SEMANTIC_TOKEN_COLORS: ["Scope", "Foreground", "Font Style"],
}

_TITLES = {
    SECTION_COLORS: "UI Color",
    SECTION_TOKEN_COLORS: "Token Color",
    SECTION_SEMANTIC_TOKEN_COLORS: "Semantic Token",
}


class ScopePanel(QWidget):
    """Table of one theme section with add, edit and delete actions."""

    message = Signal(str)

    def __init__(
        self,
        session: ThemeSession,
        section: str,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        if section not in SECTIONS:
            raise ValueError(f"Unknown theme section: {section!r}")
        self._session = session
        self._section = section
        self._setup_ui()
        self._session.theme_changed.connect(self.refresh)
        self.refresh()

    @property
    def section(self) -> str:
        return self._section

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        toolbar = QHBoxLayout()
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText("Search scopes...")
        self._search_edit.textChanged.connect(lambda _text: self.refresh())
        self._add_btn = QPushButton(f"Add {_TITLES[self._section]}")
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

        columns = _COLUMNS[self._section]
        self._table = QTableWidget()
        self._table.setColumnCount(len(columns))
        self._table.setHorizontalHeaderLabels(columns)
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        for column in range(1, len(columns)):
            header.setSectionResizeMode(column, QHeaderView.ResizeMode.ResizeToContents)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setAlternatingRowColors(True)
        self._table.doubleClicked.connect(lambda _index: self._edit())
        layout.addWidget(self._table, 1)

    # -- rendering --

    def _entries(self) -> dict:
        theme = self._session.theme
        if theme is None:
            return {}
        if self._section == SECTION_COLORS:
            return theme.colors
        if self._section == SECTION_TOKEN_COLORS:
            return theme.token_colors
        return theme.semantic_token_colors or {}

    def refresh(self) -> None:
        self._add_btn.setEnabled(self._session.theme is not None)
        needle = self._search_edit.text().strip().lower()
        rows = [
            (scope, entry)
            for scope, entry in self._entries().items()
            if not needle or needle in scope.lower()
        ]
        self._table.setRowCount(len(rows))
        for row, (scope, entry) in enumerate(rows):
            scope_item = QTableWidgetItem(scope)
            scope_item.setData(Qt.ItemDataRole.UserRole, scope)
            self._table.setItem(row, 0, scope_item)
            for column, cell in enumerate(self._cells(entry), start=1):
                self._table.setItem(row, column, cell)

    def _cells(self, entry) -> list[QTableWidgetItem]:
        if self._section == SECTION_COLORS:
            return [self._color_cell(entry.color_style)]
        if self._section == SECTION_TOKEN_COLORS:
            return [
                self._color_cell(entry.foreground),
                self._color_cell(entry.background),
                QTableWidgetItem(entry.font_style or ""),
            ]
        return [self._color_cell(entry.foreground), QTableWidgetItem(entry.font_style or "")]

    @staticmethod
    def _color_cell(style: ColorStyle | None) -> QTableWidgetItem:
        if style is None:
            return QTableWidgetItem("")
        item = QTableWidgetItem(swatch_icon(style.value), f"{style.name}  {style.value}")
        item.setToolTip(f"Used in {len(style.scopes)} scope(s)")
        return item

    # -- actions --

    def _color_names(self) -> list[tuple[str, str]]:
        theme = self._session.theme
        if theme is None:
            return []
        return [(name, style.value) for name, style in theme.color_styles.items()]

    def _selected_scope(self) -> str | None:
        row = self._table.currentRow()
        if row < 0:
            return None
        item = self._table.item(row, 0)
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _add(self) -> None:
        if self._session.theme is None:
            return
        if not self._session.theme.color_styles and self._section == SECTION_COLORS:
            self.message.emit("Add a color on the Colors page first")
            return
        dialog = ScopeEntryDialog(
            self._section,
            self._color_names(),
            title=f"Add {_TITLES[self._section]}",
            parent=self,
        )
        if not dialog.exec():
            return
        if dialog.scope() in self._entries():
            self.message.emit(f"{dialog.scope()} already exists")
            return
        self._save(dialog)

    def _edit(self) -> None:
        scope = self._selected_scope()
        entry = self._entries().get(scope) if scope else None
        if entry is None:
            self.message.emit("Select a scope to edit")
            return
        if self._section == SECTION_COLORS:
            foreground, background, font_style = entry.color_style.name, "", ""
        elif self._section == SECTION_TOKEN_COLORS:
            foreground = entry.foreground.name if entry.foreground else ""
            background = entry.background.name if entry.background else ""
            font_style = entry.font_style or ""
        else:
            foreground = entry.foreground.name if entry.foreground else ""
            background, font_style = "", entry.font_style or ""
        dialog = ScopeEntryDialog(
            self._section,
            self._color_names(),
            scope=scope,
            foreground=foreground,
            background=background,
            font_style=font_style,
            title=f"Edit {_TITLES[self._section]}",
            parent=self,
        )
        if not dialog.exec():
            return
        ok, message = self._session.validate_entry(
            self._section,
            dialog.scope(),
            dialog.foreground(),
            dialog.background(),
            dialog.font_style(),
        )
        if not ok:
            self.message.emit(message)
            return
        new_scope = dialog.scope()
        if new_scope != scope:
            ok, message = self._session.rename_scope(self._section, scope, new_scope)
            if not ok:
                self.message.emit(message)
                return
        self._save(dialog)

    def _save(self, dialog: ScopeEntryDialog) -> None:
        if self._section == SECTION_COLORS:
            _ok, message = self._session.set_ui_color(dialog.scope(), dialog.foreground())
        elif self._section == SECTION_TOKEN_COLORS:
            _ok, message = self._session.set_token_color(
                dialog.scope(), dialog.foreground(), dialog.background(), dialog.font_style()
            )
        else:
            _ok, message = self._session.set_semantic_token_color(
                dialog.scope(), dialog.foreground(), dialog.font_style()
            )
        self.message.emit(message)

    def _delete(self) -> None:
        scope = self._selected_scope()
        if not scope:
            self.message.emit("Select a scope to delete")
            return
        answer = QMessageBox.question(self, "Delete Scope", f"Delete {scope}?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        if self._section == SECTION_COLORS:
            _ok, message = self._session.remove_ui_color(scope)
        elif self._section == SECTION_TOKEN_COLORS:
            _ok, message = self._session.remove_token_color(scope)
        else:
            _ok, message = self._session.remove_semantic_token_color(scope)
        self.message.emit(message)
