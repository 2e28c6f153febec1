"""Left sidebar navigation widget."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget,
)


class NavItem(QFrame):
    """A single clickable navigation item."""

    clicked = Signal()

    def __init__(self, label: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("NavItem")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setProperty("selected", False)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAccessibleName(label)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(14, 8, 14, 8)

        self._label = QLabel(label)
        self._label.setObjectName("NavLabel")
        layout.addWidget(self._label, 1)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)

    def keyPressEvent(self, event) -> None:
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self.clicked.emit()
            event.accept()
            return
        super().keyPressEvent(event)

    def set_selected(self, selected: bool) -> None:
        self.setProperty("selected", selected)
        font = self._label.font()
        font.setBold(selected)
        self._label.setFont(font)
        self.style().unpolish(self)
        self.style().polish(self)


class SidebarNav(QFrame):
    """Left sidebar with branding and one item per editor page."""

    page_changed = Signal(int)

    NAV_ITEMS = (
        "Theme",
        "Colors",
        "UI Colors",
        "Token Colors",
        "Semantic Tokens",
    )

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("Sidebar")
        self.setMinimumWidth(168)
        self.setMaximumWidth(220)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        branding = QLabel("Themesmith")
        branding.setObjectName("SidebarBrand")
        branding.setAlignment(Qt.AlignmentFlag.AlignCenter)
        branding.setFixedHeight(48)
        layout.addWidget(branding)

        self._nav_items: list[NavItem] = []
        for i, label in enumerate(self.NAV_ITEMS):
            item = NavItem(label)
            item.clicked.connect(lambda idx=i: self._on_item_clicked(idx))
            self._nav_items.append(item)
            layout.addWidget(item)

        layout.addStretch(1)

        if self._nav_items:
            self._nav_items[0].set_selected(True)

    def _on_item_clicked(self, index: int) -> None:
        self.set_selected(index)
        self.page_changed.emit(index)

    def set_selected(self, index: int) -> None:
        for i, item in enumerate(self._nav_items):
            item.set_selected(i == index)
