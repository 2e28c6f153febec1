"""Color style registry operations and the scope reference index.

Every scope map entry that points at a ColorStyle is mirrored by a reference
id in that style's ``scopes``. All rebinding goes through
``update_color_reference`` and ``remove_color_reference`` so the index never
needs a full rescan during editing.
"""

from __future__ import annotations

from typing import Iterator

from themesmith.core.color_validator import normalize_color
from themesmith.core.constants import (
    BACKGROUND_SUFFIX,
    FOREGROUND_SUFFIX,
    SECTION_COLORS,
    SECTION_SEMANTIC_TOKEN_COLORS,
    SECTION_TOKEN_COLORS,
    SEMANTIC_SUFFIX,
)
from themesmith.core.models import (
    ColorRegistry,
    ColorStyle,
    ScopeConflictError,
    SemanticTokenColor,
    Theme,
    TokenColor,
    UIColor,
    is_valid_font_style,
)


def token_reference(scope: str, slot: str) -> str:
    """Reference id for the foreground (``fg``) or background (``bg``) of a token rule."""
    return f"{scope} ({slot})"


def semantic_reference(scope: str) -> str:
    return f"{scope} ({SEMANTIC_SUFFIX})"


# -- registry --


def register_or_reuse_color(registry: ColorRegistry, value: object) -> ColorStyle | None:
    """Return the style holding ``value``, creating it when needed.

    Returns None when ``value`` is not a valid color.
    """
    cleaned = normalize_color(value)
    if cleaned is None:
        return None
    existing = registry.find_by_value(cleaned)
    if existing is not None:
        return existing
    return registry.add(ColorStyle(name=registry.next_auto_name(), value=cleaned))


def rename_color_style(
    registry: ColorRegistry,
    old_name: str,
    new_name: str,
    new_value: str,
) -> ColorStyle | None:
    """Rename and recolor a style in place; referents keep pointing at it.

    ``new_value`` must already be validated. Returns None when ``old_name`` is
    not registered.
    """
    style = registry.get(old_name)
    if style is None:
        return None
    registry.rekey(style, new_name, new_value.strip())
    return style


def delete_color_style(registry: ColorRegistry, name: str) -> ColorStyle | None:
    """Remove a registry entry without touching the scope maps."""
    return registry.pop(name)


# -- reference set --


def update_color_reference(
    old_style: ColorStyle | None,
    new_style: ColorStyle,
    scope_id: str,
) -> None:
    if old_style is not None and old_style is not new_style:
        old_style.scopes.pop(scope_id, None)
    new_style.scopes[scope_id] = None


def remove_color_reference(style: ColorStyle | None, scope_id: str) -> None:
    if style is not None:
        style.scopes.pop(scope_id, None)


def get_scopes_for_color(style: ColorStyle) -> list[str]:
    return list(style.scopes)


def _rebind(old_style: ColorStyle | None, new_style: ColorStyle | None, scope_id: str) -> None:
    if new_style is None:
        remove_color_reference(old_style, scope_id)
    else:
        update_color_reference(old_style, new_style, scope_id)


def _require_registered(theme: Theme, style: ColorStyle | None) -> None:
    if style is not None and not theme.color_styles.holds(style):
        raise KeyError(f"Color style {style.name!r} is not registered in this theme")


def _require_font_style(font_style: str | None) -> None:
    if font_style is not None and not is_valid_font_style(font_style):
        raise ValueError(f"Unsupported font style: {font_style!r}")


# -- UI colors --


def set_ui_color(theme: Theme, scope: str, style: ColorStyle) -> UIColor:
    _require_registered(theme, style)
    previous = theme.colors.get(scope)
    update_color_reference(previous.color_style if previous else None, style, scope)
    entry = UIColor(color_style=style)
    theme.colors[scope] = entry
    return entry


def remove_ui_color(theme: Theme, scope: str) -> bool:
    entry = theme.colors.pop(scope, None)
    if entry is None:
        return False
    remove_color_reference(entry.color_style, scope)
    return True


# -- token colors --


def set_token_color(
    theme: Theme,
    scope: str,
    foreground: ColorStyle | None = None,
    background: ColorStyle | None = None,
    font_style: str | None = None,
) -> TokenColor:
    _require_registered(theme, foreground)
    _require_registered(theme, background)
    _require_font_style(font_style)
    previous = theme.token_colors.get(scope) or TokenColor()
    _rebind(previous.foreground, foreground, token_reference(scope, FOREGROUND_SUFFIX))
    _rebind(previous.background, background, token_reference(scope, BACKGROUND_SUFFIX))
    entry = TokenColor(foreground=foreground, background=background, font_style=font_style)
    theme.token_colors[scope] = entry
    return entry


def remove_token_color(theme: Theme, scope: str) -> bool:
    entry = theme.token_colors.pop(scope, None)
    if entry is None:
        return False
    remove_color_reference(entry.foreground, token_reference(scope, FOREGROUND_SUFFIX))
    remove_color_reference(entry.background, token_reference(scope, BACKGROUND_SUFFIX))
    return True


# -- semantic token colors --


def set_semantic_token_color(
    theme: Theme,
    scope: str,
    foreground: ColorStyle | None = None,
    font_style: str | None = None,
) -> SemanticTokenColor:
    _require_registered(theme, foreground)
    _require_font_style(font_style)
    if theme.semantic_token_colors is None:
        theme.semantic_token_colors = {}
    previous = theme.semantic_token_colors.get(scope) or SemanticTokenColor()
    _rebind(previous.foreground, foreground, semantic_reference(scope))
    entry = SemanticTokenColor(foreground=foreground, font_style=font_style)
    theme.semantic_token_colors[scope] = entry
    return entry


def remove_semantic_token_color(theme: Theme, scope: str) -> bool:
    if theme.semantic_token_colors is None:
        return False
    entry = theme.semantic_token_colors.pop(scope, None)
    if entry is None:
        return False
    remove_color_reference(entry.foreground, semantic_reference(scope))
    return True


# -- whole-theme helpers --


def rename_scope(theme: Theme, section: str, old_scope: str, new_scope: str) -> bool:
    """Move an entry to a new scope key, carrying its color references along."""
    if old_scope == new_scope:
        return _section_map(theme, section).get(old_scope) is not None
    entries = _section_map(theme, section)
    entry = entries.get(old_scope)
    if entry is None:
        return False
    if new_scope in entries:
        raise ScopeConflictError(f"Scope {new_scope!r} already exists in {section}")

    if section == SECTION_COLORS:
        remove_ui_color(theme, old_scope)
        set_ui_color(theme, new_scope, entry.color_style)
    elif section == SECTION_TOKEN_COLORS:
        remove_token_color(theme, old_scope)
        set_token_color(theme, new_scope, entry.foreground, entry.background, entry.font_style)
    else:
        remove_semantic_token_color(theme, old_scope)
        set_semantic_token_color(theme, new_scope, entry.foreground, entry.font_style)
    return True


def detach_color_style(theme: Theme, style: ColorStyle) -> list[str]:
    """Clear every scope map slot that uses ``style``.

    UI entries are removed outright. Token and semantic entries lose the slot
    and are removed only when nothing else is left on them. Returns the
    released reference ids.
    """
    released: list[str] = []
    for scope, entry in list(theme.colors.items()):
        if entry.color_style is style:
            remove_ui_color(theme, scope)
            released.append(scope)

    for scope, token in list(theme.token_colors.items()):
        foreground = None if token.foreground is style else token.foreground
        background = None if token.background is style else token.background
        if foreground is token.foreground and background is token.background:
            continue
        if token.foreground is style:
            released.append(token_reference(scope, FOREGROUND_SUFFIX))
        if token.background is style:
            released.append(token_reference(scope, BACKGROUND_SUFFIX))
        remaining = TokenColor(foreground, background, token.font_style)
        if remaining.is_empty():
            remove_token_color(theme, scope)
        else:
            set_token_color(theme, scope, foreground, background, token.font_style)

    for scope, semantic in list((theme.semantic_token_colors or {}).items()):
        if semantic.foreground is not style:
            continue
        released.append(semantic_reference(scope))
        if SemanticTokenColor(None, semantic.font_style).is_empty():
            remove_semantic_token_color(theme, scope)
        else:
            set_semantic_token_color(theme, scope, None, semantic.font_style)
    return released


def iter_scope_references(theme: Theme) -> Iterator[tuple[str, ColorStyle]]:
    """Yield ``(reference id, style)`` for every color slot in the scope maps."""
    for scope, entry in theme.colors.items():
        yield scope, entry.color_style
    for scope, token in theme.token_colors.items():
        if token.foreground is not None:
            yield token_reference(scope, FOREGROUND_SUFFIX), token.foreground
        if token.background is not None:
            yield token_reference(scope, BACKGROUND_SUFFIX), token.background
    for scope, semantic in (theme.semantic_token_colors or {}).items():
        if semantic.foreground is not None:
            yield semantic_reference(scope), semantic.foreground


def collect_scope_references(theme: Theme) -> dict[ColorStyle, list[str]]:
    """Scan the scope maps and group reference ids by the style they point at."""
    collected: dict[ColorStyle, list[str]] = {}
    for reference, style in iter_scope_references(theme):
        collected.setdefault(style, []).append(reference)
    return collected


def rebuild_scope_index(theme: Theme) -> None:
    """Recompute every registered style's ``scopes`` from the scope maps."""
    for style in theme.color_styles.values():
        style.scopes.clear()
    for style, references in collect_scope_references(theme).items():
        style.scopes.clear()
        style.scopes.update(dict.fromkeys(references))


def _section_map(theme: Theme, section: str) -> dict:
    if section == SECTION_COLORS:
        return theme.colors
    if section == SECTION_TOKEN_COLORS:
        return theme.token_colors
    if section == SECTION_SEMANTIC_TOKEN_COLORS:
        return theme.semantic_token_colors if theme.semantic_token_colors is not None else {}
    raise ValueError(f"Unknown theme section: {section!r}")
