"""VS Code theme JSON decoding and encoding."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, TypeVar

from themesmith.core.color_validator import normalize_color
from themesmith.core.constants import (
    DEFAULT_SCHEMA,
    DEFAULT_THEME_NAME,
    DEFAULT_THEME_TYPE,
    DEFAULT_TOKEN_SCOPE,
    THEME_TYPES,
)
from themesmith.core.models import (
    ColorRegistry,
    ColorStyle,
    Theme,
    ThemeParseError,
    is_valid_font_style,
)
from themesmith.core.scope_index import (
    set_semantic_token_color,
    set_token_color,
    set_ui_color,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def decode_theme(json_text: str) -> Theme:
    """Parse theme JSON text into a Theme, logging skipped values."""
    theme, _warnings = decode_theme_with_warnings(json_text)
    return theme


def decode_theme_with_warnings(json_text: str) -> tuple[Theme, list[str]]:
    """Parse theme JSON text into a Theme.

    Invalid color literals and font styles are skipped, not fatal; each skip
    is returned as a warning string. Malformed JSON raises ThemeParseError.
    """
    try:
        document = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise ThemeParseError(f"Invalid theme JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise ThemeParseError("Expected a JSON object at the top level of the theme")

    warnings: list[str] = []
    colors_data = _mapping_section(document, "colors", warnings)
    token_entries = _token_entries(document, warnings)
    semantic_data: Mapping[str, Any] | None = None
    if document.get("semanticTokenColors") is not None:
        semantic_data = _mapping_section(document, "semanticTokenColors", warnings)

    theme = Theme(
        schema=_string_field(document, "$schema", DEFAULT_SCHEMA),
        name=_string_field(document, "name", DEFAULT_THEME_NAME),
        type=_theme_type(document, warnings),
        color_styles=_build_registry(
            _collect_color_literals(colors_data, token_entries, semantic_data)
        ),
        semantic_highlighting=document.get("semanticHighlighting") is True,
    )

    for scope, value in colors_data.items():
        style = _lookup(theme.color_styles, value)
        if style is None:
            warnings.append(f"colors[{scope!r}]: skipped invalid color {value!r}")
            continue
        set_ui_color(theme, scope, style)

    for index, entry in enumerate(token_entries):
        scope = _token_scope(entry.get("scope"))
        settings = entry.get("settings")
        if not isinstance(settings, Mapping):
            settings = {}
        context = f"tokenColors[{index}] ({scope})"
        set_token_color(
            theme,
            scope,
            foreground=_optional_color(theme.color_styles, settings, "foreground", context, warnings),
            background=_optional_color(theme.color_styles, settings, "background", context, warnings),
            font_style=_optional_font_style(settings, context, warnings),
        )

    if semantic_data is not None:
        theme.semantic_token_colors = {}
        for scope, settings in semantic_data.items():
            if isinstance(settings, str):
                settings = {"foreground": settings}
            if not isinstance(settings, Mapping):
                warnings.append(f"semanticTokenColors[{scope!r}]: skipped non-object entry")
                continue
            context = f"semanticTokenColors[{scope!r}]"
            set_semantic_token_color(
                theme,
                scope,
                foreground=_optional_color(
                    theme.color_styles, settings, "foreground", context, warnings
                ),
                font_style=_optional_font_style(settings, context, warnings),
            )

    for message in warnings:
        logger.warning("theme decode: %s", message)
    return theme, warnings


def encode_theme(theme: Theme) -> str:
    """Serialize a Theme to VS Code theme JSON text with a stable layout."""
    document: dict[str, Any] = {
        "$schema": theme.schema,
        "name": theme.name,
        "type": theme.type,
        "colorStyles": {
            name: {"name": style.name, "value": style.value}
            for name, style in sort_by_specificity(theme.color_styles.items())
        },
        "colors": {
            scope: entry.color_style.value
            for scope, entry in sort_by_specificity(theme.colors.items())
        },
        "tokenColors": [
            {
                "name": "",
                "scope": scope,
                "settings": _settings(
                    foreground=token.foreground,
                    background=token.background,
                    font_style=token.font_style,
                ),
            }
            for scope, token in sort_by_specificity(theme.token_colors.items())
        ],
        "semanticHighlighting": theme.semantic_highlighting,
    }
    if theme.semantic_token_colors is not None:
        document["semanticTokenColors"] = {
            scope: _settings(foreground=semantic.foreground, font_style=semantic.font_style)
            for scope, semantic in sort_by_specificity(theme.semantic_token_colors.items())
        }
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def specificity_key(scope: str) -> tuple[int, str]:
    """Sort key: more dot-separated segments first, then alphabetical."""
    return (-len(scope.split(".")), scope)


def sort_by_specificity(items: Iterable[tuple[str, _T]]) -> list[tuple[str, _T]]:
    return sorted(items, key=lambda item: specificity_key(item[0]))


def _settings(
    *,
    foreground: ColorStyle | None = None,
    background: ColorStyle | None = None,
    font_style: str | None = None,
) -> dict[str, str]:
    settings: dict[str, str] = {}
    if foreground is not None:
        settings["foreground"] = foreground.value
    if background is not None:
        settings["background"] = background.value
    if font_style:
        settings["fontStyle"] = font_style
    return settings


def _mapping_section(
    document: Mapping[str, Any],
    key: str,
    warnings: list[str],
) -> Mapping[str, Any]:
    value = document.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        warnings.append(f"{key}: expected an object, section ignored")
        return {}
    return value


def _token_entries(document: Mapping[str, Any], warnings: list[str]) -> list[Mapping[str, Any]]:
    value = document.get("tokenColors")
    if value is None:
        return []
    if not isinstance(value, list):
        warnings.append("tokenColors: expected an array, section ignored")
        return []
    entries: list[Mapping[str, Any]] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, Mapping):
            warnings.append(f"tokenColors[{index}]: skipped non-object entry")
            continue
        entries.append(entry)
    return entries


def _collect_color_literals(
    colors_data: Mapping[str, Any],
    token_entries: list[Mapping[str, Any]],
    semantic_data: Mapping[str, Any] | None,
) -> set[str]:
    candidates: list[object] = list(colors_data.values())
    for entry in token_entries:
        settings = entry.get("settings")
        if isinstance(settings, Mapping):
            candidates.append(settings.get("foreground"))
            candidates.append(settings.get("background"))
    for settings in (semantic_data or {}).values():
        if isinstance(settings, Mapping):
            candidates.append(settings.get("foreground"))
        else:
            candidates.append(settings)

    literals: set[str] = set()
    for candidate in candidates:
        cleaned = normalize_color(candidate)
        if cleaned is not None:
            literals.add(cleaned)
    return literals


def _build_registry(literals: set[str]) -> ColorRegistry:
    registry = ColorRegistry()
    for index, value in enumerate(sorted(literals), start=1):
        registry.add(ColorStyle(name=f"Color {index}", value=value))
    return registry


def _lookup(registry: ColorRegistry, value: object) -> ColorStyle | None:
    cleaned = normalize_color(value)
    if cleaned is None:
        return None
    return registry.find_by_value(cleaned)


def _optional_color(
    registry: ColorRegistry,
    settings: Mapping[str, Any],
    key: str,
    context: str,
    warnings: list[str],
) -> ColorStyle | None:
    raw = settings.get(key)
    if raw is None or raw == "":
        return None
    style = _lookup(registry, raw)
    if style is None:
        warnings.append(f"{context}: skipped invalid {key} color {raw!r}")
    return style


def _optional_font_style(
    settings: Mapping[str, Any],
    context: str,
    warnings: list[str],
) -> str | None:
    raw = settings.get("fontStyle")
    if raw is None or raw == "":
        return None
    if not is_valid_font_style(raw):
        warnings.append(f"{context}: skipped unsupported fontStyle {raw!r}")
        return None
    return raw


def _token_scope(raw: object) -> str:
    if isinstance(raw, list):
        parts = [part for part in raw if isinstance(part, str)]
        if parts:
            return ", ".join(parts)
        return DEFAULT_TOKEN_SCOPE
    if isinstance(raw, str) and raw:
        return raw
    return DEFAULT_TOKEN_SCOPE


def _string_field(document: Mapping[str, Any], key: str, default: str) -> str:
    value = document.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def _theme_type(document: Mapping[str, Any], warnings: list[str]) -> str:
    value = document.get("type")
    if value is None or value == "":
        return DEFAULT_THEME_TYPE
    if value not in THEME_TYPES:
        warnings.append(f"type: unsupported theme type {value!r}, using {DEFAULT_THEME_TYPE!r}")
        return DEFAULT_THEME_TYPE
    return value
