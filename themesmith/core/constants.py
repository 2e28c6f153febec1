"""Theme model constants."""

from __future__ import annotations

DEFAULT_SCHEMA = "vscode://schemas/color-theme"
DEFAULT_THEME_NAME = "Untitled Theme"
DEFAULT_THEME_TYPE = "dark"
DEFAULT_TOKEN_SCOPE = "default"

THEME_TYPES: tuple[str, ...] = ("dark", "light", "hc")

SECTION_COLORS = "colors"
SECTION_TOKEN_COLORS = "tokenColors"
SECTION_SEMANTIC_TOKEN_COLORS = "semanticTokenColors"
SECTIONS: tuple[str, ...] = (
    SECTION_COLORS,
    SECTION_TOKEN_COLORS,
    SECTION_SEMANTIC_TOKEN_COLORS,
)

FOREGROUND_SUFFIX = "fg"
BACKGROUND_SUFFIX = "bg"
SEMANTIC_SUFFIX = "semantic"

AUTO_COLOR_NAME_PREFIX = "Color "

FONT_STYLE_WORDS: tuple[str, ...] = ("bold", "italic", "underline", "strikethrough")
FONT_STYLE_PLAIN: tuple[str, ...] = ("regular", "none")

# Offered by the editor dialogs, in display order.
FONT_STYLE_CHOICES: tuple[str, ...] = (
    "regular",
    "bold",
    "italic",
    "bold italic",
    "underline",
    "underline italic",
    "strikethrough",
    "bold underline",
    "bold strikethrough",
    "italic strikethrough",
    "underline strikethrough",
)
