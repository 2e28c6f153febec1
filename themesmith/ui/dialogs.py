"""File prompts and the color / scope editing dialogs."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QColorDialog,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from themesmith.core.constants import (
    FONT_STYLE_CHOICES,
    SECTION_COLORS,
    SECTION_TOKEN_COLORS,
)
from themesmith.core.file_service import read_text
from themesmith.ui.utils import qcolor_from_hex, swatch_icon

_NONE_LABEL = "(none)"
_JSON_FILTER = "JSON Files (*.json);;All Files (*)"


def prompt_open_file(parent: QWidget | None, start_dir: str = "") -> tuple[Path, str] | None:
    """Ask for a theme file and read it. None means the user cancelled.

    OSError and UnicodeDecodeError from reading the chosen file propagate.
    """
    path, _ = QFileDialog.getOpenFileName(parent, "Open Theme", start_dir, _JSON_FILTER)
    if not path:
        return None
    return Path(path), read_text(path)


def prompt_save_path(parent: QWidget | None, start_path: str = "") -> Path | None:
    path, _ = QFileDialog.getSaveFileName(parent, "Save Theme", start_path, _JSON_FILTER)
    if not path:
        return None
    if not path.lower().endswith(".json"):
        path += ".json"
    return Path(path)


class ColorStyleDialog(QDialog):
    """Edit the name and value of a color style."""

    def __init__(
        self,
        name: str = "",
        value: str = "#000000",
        *,
        title: str = "Color",
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumWidth(360)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self._name_edit = QLineEdit(name)
        self._name_edit.setPlaceholderText("e.g. Accent Blue")
        self._value_edit = QLineEdit(value)
        self._value_edit.setPlaceholderText("#RRGGBB")
        self._pick_btn = QPushButton("Pick...")
        self._pick_btn.clicked.connect(self._pick_color)
        self._value_edit.textChanged.connect(self._update_swatch)

        value_row = QHBoxLayout()
        value_row.setContentsMargins(0, 0, 0, 0)
        value_row.addWidget(self._value_edit, 1)
        value_row.addWidget(self._pick_btn)

        form.addRow("Name:", self._name_edit)
        form.addRow("Value:", value_row)
        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)
        self._update_swatch(value)

    def name(self) -> str:
        return self._name_edit.text().strip()

    def value(self) -> str:
        return self._value_edit.text().strip()

    def _pick_color(self) -> None:
        color = QColorDialog.getColor(qcolor_from_hex(self.value()), self, "Pick Color")
        if color.isValid():
            self._value_edit.setText(color.name())

    def _update_swatch(self, value: str) -> None:
        self._pick_btn.setIcon(swatch_icon(value))


class ScopeEntryDialog(QDialog):
    """Edit one entry of the UI, token or semantic token section.

    UI colors require a color; token entries have foreground, background and
    font style; semantic entries have foreground and font style.
    """

    def __init__(
        self,
        section: str,
        color_names: list[tuple[str, str]],
        *,
        scope: str = "",
        foreground: str = "",
        background: str = "",
        font_style: str = "",
        title: str = "Scope",
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self._scope_edit = QLineEdit(scope)
        self._scope_edit.setPlaceholderText(
            "editor.background" if section == SECTION_COLORS else "comment, string.quoted"
        )
        form.addRow("Scope:", self._scope_edit)

        optional = section != SECTION_COLORS
        self._foreground_combo = self._color_combo(color_names, foreground, optional=optional)
        form.addRow("Color:" if section == SECTION_COLORS else "Foreground:", self._foreground_combo)

        self._background_combo: QComboBox | None = None
        if section == SECTION_TOKEN_COLORS:
            self._background_combo = self._color_combo(color_names, background, optional=True)
            form.addRow("Background:", self._background_combo)

        self._font_combo: QComboBox | None = None
        if section != SECTION_COLORS:
            self._font_combo = QComboBox()
            self._font_combo.addItem(_NONE_LABEL, "")
            for choice in FONT_STYLE_CHOICES:
                self._font_combo.addItem(choice, choice)
            if font_style and self._font_combo.findData(font_style) < 0:
                self._font_combo.addItem(font_style, font_style)
            self._font_combo.setCurrentIndex(max(0, self._font_combo.findData(font_style)))
            form.addRow("Font Style:", self._font_combo)

        layout.addLayout(form)
        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @staticmethod
    def _color_combo(
        color_names: list[tuple[str, str]],
        current: str,
        *,
        optional: bool,
    ) -> QComboBox:
        combo = QComboBox()
        if optional:
            combo.addItem(_NONE_LABEL, "")
        for name, value in color_names:
            combo.addItem(swatch_icon(value), f"{name}  {value}", name)
        combo.setCurrentIndex(max(0, combo.findData(current)))
        return combo

    def scope(self) -> str:
        return self._scope_edit.text().strip()

    def foreground(self) -> str:
        return self._foreground_combo.currentData() or ""

    def background(self) -> str:
        if self._background_combo is None:
            return ""
        return self._background_combo.currentData() or ""

    def font_style(self) -> str:
        if self._font_combo is None:
            return ""
        return self._font_combo.currentData() or ""
