"""In-memory theme model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from themesmith.core.constants import (
    AUTO_COLOR_NAME_PREFIX,
    DEFAULT_SCHEMA,
    DEFAULT_THEME_NAME,
    DEFAULT_THEME_TYPE,
    FONT_STYLE_PLAIN,
    FONT_STYLE_WORDS,
)


class ThemeParseError(ValueError):
    """Raised when theme text is not a JSON object."""


class ColorStyleConflictError(ValueError):
    """Raised when a color style name or value is already taken by another style."""


class ScopeConflictError(ValueError):
    """Raised when a scope entry would overwrite a different existing entry."""


@dataclass(eq=False, slots=True)
class ColorStyle:
    """A named, reusable color value.

    ``scopes`` is an insertion-ordered set of the scope reference ids that
    currently point at this instance. Styles compare by identity.
    """

    name: str
    value: str
    scopes: dict[str, None] = field(default_factory=dict)


@dataclass(slots=True)
class UIColor:
    color_style: ColorStyle


@dataclass(slots=True)
class TokenColor:
    foreground: ColorStyle | None = None
    background: ColorStyle | None = None
    font_style: str | None = None

    def is_empty(self) -> bool:
        return self.foreground is None and self.background is None and not self.font_style


@dataclass(slots=True)
class SemanticTokenColor:
    foreground: ColorStyle | None = None
    font_style: str | None = None

    def is_empty(self) -> bool:
        return self.foreground is None and not self.font_style


class ColorRegistry:
    """Color styles keyed by name, with a reverse index by value.

    A style's registry key is always its ``name``. Values are unique across
    the registry; ``rekey`` is the only supported way to change either.
    """

    def __init__(self, styles: list[ColorStyle] | None = None) -> None:
        self._by_name: dict[str, ColorStyle] = {}
        self._by_value: dict[str, ColorStyle] = {}
        for style in styles or ():
            self.add(style)

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> ColorStyle | None:
        return self._by_name.get(name)

    def find_by_value(self, value: str) -> ColorStyle | None:
        return self._by_value.get(value)

    def holds(self, style: ColorStyle) -> bool:
        """Return True when ``style`` itself (not an equal copy) is registered."""
        return self._by_name.get(style.name) is style

    def names(self) -> list[str]:
        return list(self._by_name)

    def values(self) -> list[ColorStyle]:
        return list(self._by_name.values())

    def items(self) -> list[tuple[str, ColorStyle]]:
        return list(self._by_name.items())

    def add(self, style: ColorStyle) -> ColorStyle:
        if style.name in self._by_name:
            raise ColorStyleConflictError(f"Color style name already exists: {style.name!r}")
        if style.value in self._by_value:
            owner = self._by_value[style.value]
            raise ColorStyleConflictError(
                f"Color value {style.value!r} is already defined by {owner.name!r}"
            )
        self._by_name[style.name] = style
        self._by_value[style.value] = style
        return style

    def pop(self, name: str) -> ColorStyle | None:
        style = self._by_name.pop(name, None)
        if style is not None:
            self._by_value.pop(style.value, None)
        return style

    def rekey(self, style: ColorStyle, new_name: str, new_value: str) -> None:
        """Rename ``style`` in place and move it to ``new_name``."""
        if not self.holds(style):
            raise KeyError(style.name)
        name_owner = self._by_name.get(new_name)
        if name_owner is not None and name_owner is not style:
            raise ColorStyleConflictError(f"Color style name already exists: {new_name!r}")
        value_owner = self._by_value.get(new_value)
        if value_owner is not None and value_owner is not style:
            raise ColorStyleConflictError(
                f"Color value {new_value!r} is already defined by {value_owner.name!r}"
            )
        if new_name != style.name:
            del self._by_name[style.name]
            self._by_name[new_name] = style
        del self._by_value[style.value]
        self._by_value[new_value] = style
        style.name = new_name
        style.value = new_value

    def next_auto_name(self) -> str:
        index = len(self._by_name) + 1
        while f"{AUTO_COLOR_NAME_PREFIX}{index}" in self._by_name:
            index += 1
        return f"{AUTO_COLOR_NAME_PREFIX}{index}"


@dataclass(slots=True)
class Theme:
    """The aggregate root for one edited theme.

    ``semantic_token_colors`` is None when the theme has no such section,
    which is distinct from an empty section.
    """

    schema: str = DEFAULT_SCHEMA
    name: str = DEFAULT_THEME_NAME
    type: str = DEFAULT_THEME_TYPE
    color_styles: ColorRegistry = field(default_factory=ColorRegistry)
    colors: dict[str, UIColor] = field(default_factory=dict)
    token_colors: dict[str, TokenColor] = field(default_factory=dict)
    semantic_token_colors: dict[str, SemanticTokenColor] | None = None
    semantic_highlighting: bool = False


def is_valid_font_style(value: object) -> bool:
    """Return True for ``regular``/``none``, one style word, or two distinct words."""
    if not isinstance(value, str):
        return False
    words = value.split(" ")
    if len(words) == 1:
        return words[0] in FONT_STYLE_PLAIN or words[0] in FONT_STYLE_WORDS
    if len(words) == 2:
        first, second = words
        return first != second and first in FONT_STYLE_WORDS and second in FONT_STYLE_WORDS
    return False
