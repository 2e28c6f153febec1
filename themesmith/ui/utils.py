"""Common utilities for UI components."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import SignalInstance
from PySide6.QtGui import QColor, QIcon, QPixmap


def safe_disconnect(signal: SignalInstance, slot: Optional[Callable] = None) -> bool:
    """Safely disconnect a signal from a slot.

    Returns:
        True if disconnection succeeded or was unnecessary, False if it failed.
    """
    try:
        if slot is not None:
            signal.disconnect(slot)
        else:
            signal.disconnect()
        return True
    except (RuntimeError, TypeError):
        # Signal/slot already disconnected or invalid
        return False


def safe_disconnect_multiple(
    connections: list[tuple[SignalInstance, Optional[Callable]]]
) -> None:
    for signal, slot in connections:
        safe_disconnect(signal, slot)


def qcolor_from_hex(value: str) -> QColor:
    """Convert #RGB, #RRGGBB or #RRGGBBAA to a QColor.

    Qt reads 8-digit hex as #AARRGGBB, so the alpha byte is moved first.
    """
    text = value.strip()
    if len(text) == 9:
        text = f"#{text[7:9]}{text[1:7]}"
    return QColor(text)


def swatch_icon(value: str, size: int = 16) -> QIcon:
    pixmap = QPixmap(size, size)
    pixmap.fill(qcolor_from_hex(value))
    return QIcon(pixmap)
