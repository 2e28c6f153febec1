"""Editing session: the single owner and writer of the open theme."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from themesmith.core.codec import decode_theme_with_warnings, encode_theme
from themesmith.core.color_validator import get_color_validation_message, normalize_color
from themesmith.core.constants import (
    DEFAULT_THEME_NAME,
    DEFAULT_THEME_TYPE,
    SECTION_COLORS,
    SECTION_SEMANTIC_TOKEN_COLORS,
    SECTION_TOKEN_COLORS,
    SECTIONS,
    THEME_TYPES,
)
from themesmith.core.models import (
    ColorStyle,
    ColorStyleConflictError,
    ScopeConflictError,
    Theme,
    is_valid_font_style,
)
from themesmith.core import scope_index

logger = logging.getLogger(__name__)

Outcome = tuple[bool, str]
# scope, foreground (or the UI color), background, font style
_ResolvedEntry = tuple[str, ColorStyle | None, ColorStyle | None, str | None]


class ThemeSession(QObject):
    """Hold one Theme, apply edits to it and report changes.

    All edits go through the scope index operations so color references stay
    in sync. User mistakes are returned as ``(False, message)`` outcomes.
    """

    theme_changed = Signal()
    dirty_changed = Signal(bool)
    file_path_changed = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme: Theme | None = None
        self._file_path: Path | None = None
        self._dirty = False
        self._revision = 0
        self._warnings: list[str] = []

    # -- state --

    @property
    def theme(self) -> Theme | None:
        return self._theme

    @property
    def file_path(self) -> Path | None:
        return self._file_path

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def revision(self) -> int:
        """Counter bumped by every edit; capture it next to ``encode()``."""
        return self._revision

    def new_theme(self, name: str = DEFAULT_THEME_NAME, theme_type: str = DEFAULT_THEME_TYPE) -> Theme:
        theme_type = theme_type if theme_type in THEME_TYPES else DEFAULT_THEME_TYPE
        self._replace(Theme(name=name.strip() or DEFAULT_THEME_NAME, type=theme_type), None, [])
        self._set_dirty(True)
        return self._theme

    def load_text(self, text: str, path: str | Path | None = None) -> list[str]:
        """Decode ``text`` and make it the open theme. Raises ThemeParseError."""
        theme, warnings = decode_theme_with_warnings(text)
        self.adopt(theme, path, warnings)
        return warnings

    def adopt(self, theme: Theme, path: str | Path | None, warnings: list[str]) -> None:
        """Take ownership of an already decoded theme."""
        self._replace(theme, Path(path) if path else None, warnings)
        self._set_dirty(False)
        logger.info(
            "theme loaded name=%r path=%s colors=%d warnings=%d",
            theme.name,
            self._file_path,
            len(theme.color_styles),
            len(warnings),
        )

    def encode(self) -> str:
        return encode_theme(self._require_theme())

    def mark_saved(self, path: str | Path, revision: int | None = None) -> None:
        """Record a finished save of the text encoded at ``revision``.

        The dirty flag is cleared only when no edit happened since then.
        """
        new_path = Path(path)
        if new_path != self._file_path:
            self._file_path = new_path
            self.file_path_changed.emit(str(new_path))
        if revision is None or revision == self._revision:
            self._set_dirty(False)
            logger.info("theme saved path=%s", new_path)
        else:
            logger.info(
                "theme saved path=%s, edits since revision %d remain unsaved",
                new_path,
                revision,
            )

    # -- metadata --

    def set_name(self, name: str) -> Outcome:
        theme = self._require_theme()
        cleaned = name.strip()
        if not cleaned:
            return False, "Theme name is required"
        if cleaned != theme.name:
            theme.name = cleaned
            self._touch()
        return True, f"Theme renamed to {cleaned}"

    def set_type(self, theme_type: str) -> Outcome:
        theme = self._require_theme()
        if theme_type not in THEME_TYPES:
            return False, f"Unsupported theme type: {theme_type}"
        if theme_type != theme.type:
            theme.type = theme_type
            self._touch()
        return True, f"Theme type set to {theme_type}"

    def set_semantic_highlighting(self, enabled: bool) -> None:
        theme = self._require_theme()
        if theme.semantic_highlighting != enabled:
            theme.semantic_highlighting = enabled
            self._touch()

    # -- color styles --

    def color_style(self, name: str | None) -> ColorStyle | None:
        if not name or self._theme is None:
            return None
        return self._theme.color_styles.get(name)

    def color_usage(self, name: str) -> list[str]:
        style = self.color_style(name)
        if style is None:
            return []
        return scope_index.get_scopes_for_color(style)

    def add_color_style(self, name: str, value: str) -> Outcome:
        theme = self._require_theme()
        cleaned_name = name.strip()
        if not cleaned_name:
            return False, "Color name is required"
        cleaned_value = normalize_color(value)
        if cleaned_value is None:
            return False, get_color_validation_message()
        try:
            theme.color_styles.add(ColorStyle(name=cleaned_name, value=cleaned_value))
        except ColorStyleConflictError as exc:
            return False, str(exc)
        self._touch()
        return True, f'Color "{cleaned_name}" added'

    def edit_color_style(self, old_name: str, new_name: str, value: str) -> Outcome:
        theme = self._require_theme()
        cleaned_name = new_name.strip()
        if not cleaned_name:
            return False, "Color name is required"
        cleaned_value = normalize_color(value)
        if cleaned_value is None:
            return False, get_color_validation_message()
        try:
            style = scope_index.rename_color_style(
                theme.color_styles, old_name, cleaned_name, cleaned_value
            )
        except ColorStyleConflictError as exc:
            return False, str(exc)
        if style is None:
            return False, f'Color "{old_name}" not found'
        self._touch()
        return True, f'Color "{cleaned_name}" updated'

    def delete_color_style(self, name: str, *, cascade: bool = False) -> Outcome:
        """Delete a color style.

        A style still in use is only deleted with ``cascade=True``, which first
        clears every scope slot that uses it.
        """
        theme = self._require_theme()
        style = theme.color_styles.get(name)
        if style is None:
            return False, f'Color "{name}" not found'
        if style.scopes and not cascade:
            count = len(style.scopes)
            return False, f'Color "{name}" is used by {count} scope{"s" if count != 1 else ""}'
        released = scope_index.detach_color_style(theme, style) if cascade else []
        scope_index.delete_color_style(theme.color_styles, name)
        self._touch()
        if released:
            return True, f'Color "{name}" deleted and removed from {len(released)} scopes'
        return True, f'Color "{name}" deleted'

    # -- scope entries --

    def validate_entry(
        self,
        section: str,
        scope: str,
        foreground_name: str | None = None,
        background_name: str | None = None,
        font_style: str | None = None,
    ) -> Outcome:
        """Check a scope entry the way the setters would, without applying it."""
        self._require_theme()
        ok, message, _entry = self._check_entry(
            section, scope, foreground_name, background_name, font_style
        )
        return ok, message

    def set_ui_color(self, scope: str, color_name: str) -> Outcome:
        theme = self._require_theme()
        ok, message, entry = self._check_entry(SECTION_COLORS, scope, color_name, None, None)
        if not ok:
            return False, message
        scope, style, _background, _font_style = entry
        scope_index.set_ui_color(theme, scope, style)
        self._touch()
        return True, f"{scope} updated"

    def remove_ui_color(self, scope: str) -> Outcome:
        if not scope_index.remove_ui_color(self._require_theme(), scope):
            return False, f"{scope} not found"
        self._touch()
        return True, f"{scope} removed"

    def set_token_color(
        self,
        scope: str,
        foreground_name: str | None,
        background_name: str | None,
        font_style: str | None,
    ) -> Outcome:
        theme = self._require_theme()
        ok, message, entry = self._check_entry(
            SECTION_TOKEN_COLORS, scope, foreground_name, background_name, font_style
        )
        if not ok:
            return False, message
        scope, foreground, background, font_style = entry
        scope_index.set_token_color(theme, scope, foreground, background, font_style)
        self._touch()
        return True, f"{scope} updated"

    def remove_token_color(self, scope: str) -> Outcome:
        if not scope_index.remove_token_color(self._require_theme(), scope):
            return False, f"{scope} not found"
        self._touch()
        return True, f"{scope} removed"

    def set_semantic_token_color(
        self,
        scope: str,
        foreground_name: str | None,
        font_style: str | None,
    ) -> Outcome:
        theme = self._require_theme()
        ok, message, entry = self._check_entry(
            SECTION_SEMANTIC_TOKEN_COLORS, scope, foreground_name, None, font_style
        )
        if not ok:
            return False, message
        scope, foreground, _background, font_style = entry
        scope_index.set_semantic_token_color(theme, scope, foreground, font_style)
        self._touch()
        return True, f"{scope} updated"

    def remove_semantic_token_color(self, scope: str) -> Outcome:
        if not scope_index.remove_semantic_token_color(self._require_theme(), scope):
            return False, f"{scope} not found"
        self._touch()
        return True, f"{scope} removed"

    def rename_scope(self, section: str, old_scope: str, new_scope: str) -> Outcome:
        theme = self._require_theme()
        cleaned = new_scope.strip()
        if not cleaned:
            return False, "Scope is required"
        try:
            renamed = scope_index.rename_scope(theme, section, old_scope, cleaned)
        except ScopeConflictError as exc:
            return False, str(exc)
        if not renamed:
            return False, f"{old_scope} not found"
        if cleaned != old_scope:
            self._touch()
        return True, f"{old_scope} renamed to {cleaned}"

    # -- internals --

    def _check_entry(
        self,
        section: str,
        scope: str,
        foreground_name: str | None,
        background_name: str | None,
        font_style: str | None,
    ) -> tuple[bool, str, _ResolvedEntry]:
        empty: _ResolvedEntry = ("", None, None, None)
        if section not in SECTIONS:
            return False, f"Unknown theme section: {section}", empty
        cleaned_scope = scope.strip()
        if not cleaned_scope:
            return False, "Scope is required", empty

        if section == SECTION_COLORS:
            style = self.color_style(foreground_name)
            if style is None:
                return False, "Please select a color", empty
            return True, "", (cleaned_scope, style, None, None)

        ok, message, foreground = self._resolve_optional(foreground_name)
        if not ok:
            return False, message, empty
        background = None
        if section == SECTION_TOKEN_COLORS:
            ok, message, background = self._resolve_optional(background_name)
            if not ok:
                return False, message, empty
        font_style = font_style or None
        if font_style is not None and not is_valid_font_style(font_style):
            return False, f"Unsupported font style: {font_style}", empty
        if foreground is None and background is None and font_style is None:
            if section == SECTION_TOKEN_COLORS:
                return False, "Select a foreground, background or font style", empty
            return False, "Select a foreground color or font style", empty
        return True, "", (cleaned_scope, foreground, background, font_style)

    def _resolve_optional(self, name: str | None) -> tuple[bool, str, ColorStyle | None]:
        if not name:
            return True, "", None
        style = self.color_style(name)
        if style is None:
            return False, f'Color "{name}" not found', None
        return True, "", style

    def _require_theme(self) -> Theme:
        if self._theme is None:
            raise RuntimeError("No theme is open")
        return self._theme

    def _replace(self, theme: Theme, path: Path | None, warnings: list[str]) -> None:
        self._theme = theme
        self._revision += 1
        self._warnings = list(warnings)
        if path != self._file_path:
            self._file_path = path
            self.file_path_changed.emit(str(path) if path else "")
        self.theme_changed.emit()

    def _touch(self) -> None:
        self._revision += 1
        self._set_dirty(True)
        self.theme_changed.emit()

    def _set_dirty(self, dirty: bool) -> None:
        if dirty != self._dirty:
            self._dirty = dirty
            self.dirty_changed.emit(dirty)
