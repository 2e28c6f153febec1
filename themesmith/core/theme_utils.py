"""Helpers that read across a whole theme."""

from __future__ import annotations

from themesmith.core.models import ColorRegistry, Theme
from themesmith.core.scope_index import collect_scope_references, get_scopes_for_color


def default_foreground(theme_type: str | None = None) -> str:
    return "#000000" if theme_type == "light" else "#ffffff"


def default_background(theme_type: str | None = None) -> str:
    return "#ffffff" if theme_type == "light" else "#000000"


def extract_colors_from_theme(theme: Theme) -> ColorRegistry:
    """Build a registry holding every style reachable from the theme.

    Registered styles keep their order; styles referenced by the scope maps
    but missing from the registry are appended in scope-map order. Identities
    are preserved, so the result can replace ``theme.color_styles``. Raises
    ColorStyleConflictError when a stray style duplicates a registered value.
    """
    registry = ColorRegistry(theme.color_styles.values())
    for style in collect_scope_references(theme):
        if not registry.holds(style):
            registry.add(style)
    return registry


def color_usage(theme: Theme) -> dict[str, list[str]]:
    """Map each registry name to the reference ids currently using it."""
    return {name: get_scopes_for_color(style) for name, style in theme.color_styles.items()}
