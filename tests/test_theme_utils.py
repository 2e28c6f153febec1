"""Tests for whole-theme helper functions."""

from __future__ import annotations

import pytest

from themesmith.core.models import ColorStyle, ColorStyleConflictError, Theme, UIColor
from themesmith.core.scope_index import register_or_reuse_color, set_token_color, set_ui_color
from themesmith.core.theme_utils import (
    color_usage,
    default_background,
    default_foreground,
    extract_colors_from_theme,
)


@pytest.mark.parametrize(
    ("theme_type", "foreground", "background"),
    [
        ("light", "#000000", "#ffffff"),
        ("dark", "#ffffff", "#000000"),
        ("hc", "#ffffff", "#000000"),
        (None, "#ffffff", "#000000"),
    ],
)
def test_default_colors(theme_type, foreground, background):
    assert default_foreground(theme_type) == foreground
    assert default_background(theme_type) == background


def test_extract_colors_keeps_registered_styles():
    theme = Theme()
    first = register_or_reuse_color(theme.color_styles, "#111111")
    second = register_or_reuse_color(theme.color_styles, "#222222")
    set_ui_color(theme, "editor.background", first)

    registry = extract_colors_from_theme(theme)

    assert registry.values() == [first, second]
    assert registry is not theme.color_styles


def test_extract_colors_adds_unregistered_referents():
    theme = Theme()
    registered = register_or_reuse_color(theme.color_styles, "#111111")
    stray = ColorStyle("Stray", "#999999")
    theme.colors["editor.background"] = UIColor(color_style=registered)
    theme.colors["editor.foreground"] = UIColor(color_style=stray)

    registry = extract_colors_from_theme(theme)

    assert registry.names() == ["Color 1", "Stray"]
    assert registry.holds(stray)


def test_extract_colors_reports_value_clash():
    theme = Theme()
    register_or_reuse_color(theme.color_styles, "#111111")
    theme.colors["x"] = UIColor(color_style=ColorStyle("Copy", "#111111"))
    with pytest.raises(ColorStyleConflictError):
        extract_colors_from_theme(theme)


def test_color_usage_by_name():
    theme = Theme()
    style = register_or_reuse_color(theme.color_styles, "#111111")
    register_or_reuse_color(theme.color_styles, "#222222")
    set_ui_color(theme, "editor.background", style)
    set_token_color(theme, "comment", background=style)

    assert color_usage(theme) == {
        "Color 1": ["editor.background", "comment (bg)"],
        "Color 2": [],
    }
