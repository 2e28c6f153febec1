"""Theme model, scope index and codec exports."""

from themesmith.core.codec import decode_theme, decode_theme_with_warnings, encode_theme
from themesmith.core.color_validator import get_color_validation_message, is_valid_color
from themesmith.core.models import (
    ColorRegistry,
    ColorStyle,
    ColorStyleConflictError,
    ScopeConflictError,
    SemanticTokenColor,
    Theme,
    ThemeParseError,
    TokenColor,
    UIColor,
)
from themesmith.core.scope_index import (
    delete_color_style,
    get_scopes_for_color,
    register_or_reuse_color,
    remove_color_reference,
    rename_color_style,
    update_color_reference,
)

__all__ = [
    "ColorRegistry",
    "ColorStyle",
    "ColorStyleConflictError",
    "ScopeConflictError",
    "SemanticTokenColor",
    "Theme",
    "ThemeParseError",
    "TokenColor",
    "UIColor",
    "decode_theme",
    "decode_theme_with_warnings",
    "delete_color_style",
    "encode_theme",
    "get_color_validation_message",
    "get_scopes_for_color",
    "is_valid_color",
    "register_or_reuse_color",
    "remove_color_reference",
    "rename_color_style",
    "update_color_reference",
]
