"""Tests for theme JSON decoding and encoding."""

from __future__ import annotations

import json
import logging

import pytest

from themesmith.core.codec import (
    decode_theme,
    decode_theme_with_warnings,
    encode_theme,
    sort_by_specificity,
    specificity_key,
)
from themesmith.core.models import Theme, ThemeParseError
from themesmith.core.scope_index import (
    collect_scope_references,
    get_scopes_for_color,
    register_or_reuse_color,
    set_semantic_token_color,
    set_token_color,
    set_ui_color,
)


def _decode(document: dict[str, object]) -> Theme:
    return decode_theme(json.dumps(document))


def _mappings(theme: Theme) -> dict[str, object]:
    """Scope to color-value view of a theme, independent of registry names."""
    return {
        "colors": {scope: entry.color_style.value for scope, entry in theme.colors.items()},
        "tokenColors": {
            scope: (
                token.foreground.value if token.foreground else None,
                token.background.value if token.background else None,
                token.font_style,
            )
            for scope, token in theme.token_colors.items()
        },
        "semanticTokenColors": None
        if theme.semantic_token_colors is None
        else {
            scope: (semantic.foreground.value if semantic.foreground else None, semantic.font_style)
            for scope, semantic in theme.semantic_token_colors.items()
        },
        "semanticHighlighting": theme.semantic_highlighting,
        "type": theme.type,
        "name": theme.name,
    }


class TestDecode:
    def test_shared_literal_becomes_one_style(self):
        theme = _decode(
            {"colors": {"editor.background": "#1e1e1e", "statusBar.background": "#1e1e1e"}}
        )
        assert theme.color_styles.names() == ["Color 1"]
        style = theme.color_styles.get("Color 1")
        assert style.value == "#1e1e1e"
        assert theme.colors["editor.background"].color_style is style
        assert theme.colors["statusBar.background"].color_style is style
        assert get_scopes_for_color(style) == ["editor.background", "statusBar.background"]

    def test_token_scope_array_is_joined(self):
        theme = _decode(
            {
                "tokenColors": [
                    {"scope": ["keyword", "storage.type"], "settings": {"foreground": "#569CD6"}}
                ]
            }
        )
        assert theme.token_colors["keyword, storage.type"].foreground.value == "#569CD6"

    def test_invalid_literal_is_skipped(self):
        theme, warnings = decode_theme_with_warnings(
            json.dumps({"colors": {"a": "#1e1e1e", "b": "italic"}})
        )
        assert len(theme.color_styles) == 1
        assert list(theme.colors) == ["a"]
        assert len(warnings) == 1
        assert "'b'" in warnings[0]

    def test_skips_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="themesmith.core.codec"):
            decode_theme(json.dumps({"colors": {"b": "rgb(0, 0, 0)"}}))
        assert any("theme decode" in record.getMessage() for record in caplog.records)

    def test_same_literal_across_sections_counts_once(self):
        theme = _decode(
            {
                "colors": {"editor.background": "#123456"},
                "tokenColors": [
                    {"scope": "comment", "settings": {"foreground": "#123456", "background": "#123456"}}
                ],
                "semanticTokenColors": {"variable": {"foreground": "#123456"}},
            }
        )
        assert len(theme.color_styles) == 1
        style = theme.color_styles.get("Color 1")
        assert theme.token_colors["comment"].foreground is style
        assert theme.token_colors["comment"].background is style
        assert theme.semantic_token_colors["variable"].foreground is style
        assert get_scopes_for_color(style) == [
            "editor.background",
            "comment (fg)",
            "comment (bg)",
            "variable (semantic)",
        ]

    def test_names_follow_sorted_values_not_first_occurrence(self):
        theme = _decode(
            {"colors": {"z.first": "#ffffff", "a.second": "#000000", "m.third": "#888888"}}
        )
        assert [(name, style.value) for name, style in theme.color_styles.items()] == [
            ("Color 1", "#000000"),
            ("Color 2", "#888888"),
            ("Color 3", "#ffffff"),
        ]

    def test_surrounding_whitespace_is_trimmed_before_dedup(self):
        theme = _decode({"colors": {"a": " #1e1e1e", "b": "#1e1e1e  "}})
        assert len(theme.color_styles) == 1
        assert theme.colors["a"].color_style is theme.colors["b"].color_style

    def test_missing_fields_get_defaults(self):
        theme = _decode({})
        assert theme.schema == "vscode://schemas/color-theme"
        assert theme.name == "Untitled Theme"
        assert theme.type == "dark"
        assert theme.semantic_highlighting is False
        assert theme.semantic_token_colors is None
        assert theme.colors == {}
        assert theme.token_colors == {}

    def test_semantic_section_absent_versus_empty(self):
        assert _decode({}).semantic_token_colors is None
        assert _decode({"semanticTokenColors": {}}).semantic_token_colors == {}

    def test_semantic_string_shorthand(self):
        theme = _decode({"semanticTokenColors": {"variable.readonly": "#4fc1ff"}})
        assert theme.semantic_token_colors["variable.readonly"].foreground.value == "#4fc1ff"

    def test_token_scope_defaults(self):
        theme = _decode(
            {
                "tokenColors": [
                    {"settings": {"foreground": "#d4d4d4"}},
                ]
            }
        )
        assert list(theme.token_colors) == ["default"]

    def test_token_keeps_font_style_and_skips_invalid_one(self):
        theme, warnings = decode_theme_with_warnings(
            json.dumps(
                {
                    "tokenColors": [
                        {"scope": "comment", "settings": {"foreground": "#6a9955", "fontStyle": "italic"}},
                        {"scope": "string", "settings": {"foreground": "#ce9178", "fontStyle": "shiny"}},
                    ]
                }
            )
        )
        assert theme.token_colors["comment"].font_style == "italic"
        assert theme.token_colors["string"].font_style is None
        assert theme.token_colors["string"].foreground.value == "#ce9178"
        assert any("fontStyle" in warning for warning in warnings)

    def test_unknown_type_falls_back_to_dark(self):
        theme, warnings = decode_theme_with_warnings(json.dumps({"type": "sepia"}))
        assert theme.type == "dark"
        assert warnings

    def test_semantic_highlighting_flag(self):
        assert _decode({"semanticHighlighting": True}).semantic_highlighting is True
        assert _decode({"semanticHighlighting": "yes"}).semantic_highlighting is False

    def test_malformed_json_raises_parse_error(self):
        with pytest.raises(ThemeParseError) as excinfo:
            decode_theme("{not json")
        assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)

    def test_non_object_document_raises_parse_error(self):
        with pytest.raises(ThemeParseError):
            decode_theme("[1, 2, 3]")

    def test_decoded_index_matches_scope_maps(self):
        theme = _decode(
            {
                "colors": {"editor.background": "#1e1e1e", "editor.foreground": "#d4d4d4"},
                "tokenColors": [
                    {"scope": "comment", "settings": {"foreground": "#6a9955"}},
                    {"scope": "string", "settings": {"foreground": "#ce9178", "background": "#1e1e1e"}},
                ],
            }
        )
        expected = collect_scope_references(theme)
        for style in theme.color_styles.values():
            assert list(style.scopes) == expected.get(style, [])


class TestEncode:
    def test_specificity_order(self):
        scopes = ["editor.background", "comment.line.double-slash", "a"]
        assert sorted(scopes, key=specificity_key) == [
            "comment.line.double-slash",
            "editor.background",
            "a",
        ]
        pairs = sort_by_specificity([("b.x", 1), ("a.y", 2), ("c", 3)])
        assert [scope for scope, _ in pairs] == ["a.y", "b.x", "c"]

    def test_encoded_layout(self):
        theme = Theme(name="Sample", type="light")
        dark = register_or_reuse_color(theme.color_styles, "#1e1e1e")
        green = register_or_reuse_color(theme.color_styles, "#6a9955")
        set_ui_color(theme, "a", dark)
        set_ui_color(theme, "editor.background", dark)
        set_ui_color(theme, "comment.line.double-slash", green)
        set_token_color(theme, "comment", foreground=green, font_style="italic")
        set_token_color(theme, "markup.bold", font_style="bold")

        text = encode_theme(theme)
        document = json.loads(text)

        assert text.endswith("\n")
        assert text.startswith('{\n  "$schema"')
        assert list(document) == [
            "$schema",
            "name",
            "type",
            "colorStyles",
            "colors",
            "tokenColors",
            "semanticHighlighting",
        ]
        assert list(document["colors"]) == ["comment.line.double-slash", "editor.background", "a"]
        assert document["colorStyles"] == {
            "Color 1": {"name": "Color 1", "value": "#1e1e1e"},
            "Color 2": {"name": "Color 2", "value": "#6a9955"},
        }
        assert document["tokenColors"] == [
            {"name": "", "scope": "markup.bold", "settings": {"fontStyle": "bold"}},
            {
                "name": "",
                "scope": "comment",
                "settings": {"foreground": "#6a9955", "fontStyle": "italic"},
            },
        ]
        assert document["semanticHighlighting"] is False

    def test_semantic_section_only_when_defined(self):
        theme = Theme()
        assert "semanticTokenColors" not in json.loads(encode_theme(theme))
        theme.semantic_token_colors = {}
        assert json.loads(encode_theme(theme))["semanticTokenColors"] == {}

    def test_semantic_entries_omit_unset_fields(self):
        theme = Theme()
        style = register_or_reuse_color(theme.color_styles, "#4fc1ff")
        set_semantic_token_color(theme, "variable.readonly", foreground=style)
        set_semantic_token_color(theme, "function", font_style="underline")
        document = json.loads(encode_theme(theme))
        assert document["semanticTokenColors"] == {
            "variable.readonly": {"foreground": "#4fc1ff"},
            "function": {"fontStyle": "underline"},
        }

    def test_encode_reflects_color_edits_everywhere(self):
        theme = _decode(
            {
                "colors": {"editor.background": "#1e1e1e"},
                "tokenColors": [{"scope": "comment", "settings": {"background": "#1e1e1e"}}],
            }
        )
        theme.color_styles.rekey(theme.color_styles.get("Color 1"), "Background", "#202020")
        document = json.loads(encode_theme(theme))
        assert document["colors"] == {"editor.background": "#202020"}
        assert document["tokenColors"][0]["settings"] == {"background": "#202020"}
        assert document["colorStyles"] == {"Background": {"name": "Background", "value": "#202020"}}

    def test_non_ascii_names_are_kept(self):
        theme = Theme(name="Thème Sombre")
        assert '"name": "Thème Sombre"' in encode_theme(theme)


class TestRoundTrip:
    def test_decode_encode_decode_keeps_mappings(self):
        source = {
            "$schema": "vscode://schemas/color-theme",
            "name": "Round Trip",
            "type": "hc",
            "colors": {
                "editor.background": "#1e1e1e",
                "editor.foreground": "#d4d4d4",
                "statusBar.background": "#007acc",
            },
            "tokenColors": [
                {"scope": ["keyword", "storage.type"], "settings": {"foreground": "#569cd6"}},
                {"scope": "comment", "settings": {"foreground": "#6a9955", "fontStyle": "italic"}},
                {"scope": "markup.heading", "settings": {"background": "#1e1e1e", "fontStyle": "bold underline"}},
            ],
            "semanticHighlighting": True,
            "semanticTokenColors": {
                "variable.readonly": {"foreground": "#4fc1ff"},
                "function": {"fontStyle": "italic"},
            },
        }
        first = _decode(source)
        second = decode_theme(encode_theme(first))
        assert _mappings(second) == _mappings(first)
        assert encode_theme(second) == encode_theme(first)

    def test_colorstyles_field_is_not_trusted_on_decode(self):
        theme = _decode(
            {
                "colorStyles": {"Accent": {"name": "Accent", "value": "#ff0000"}},
                "colors": {"editor.background": "#000000"},
            }
        )
        assert theme.color_styles.names() == ["Color 1"]
        assert theme.color_styles.get("Color 1").value == "#000000"
