"""Color literal validation."""

from __future__ import annotations

import re

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def is_valid_color(value: object) -> bool:
    """Return True when ``value`` is a hex color literal: #RGB, #RRGGBB or #RRGGBBAA.

    Surrounding whitespace is ignored. Functional notations such as ``rgb()``
    are rejected.
    """
    if not isinstance(value, str):
        return False
    return bool(_HEX_COLOR_RE.match(value.strip()))


def normalize_color(value: object) -> str | None:
    """Return the stripped literal for a valid color, else None."""
    if not is_valid_color(value):
        return None
    return value.strip()  # type: ignore[union-attr]


def get_color_validation_message() -> str:
    return "Invalid color format. Use hex only: #RGB, #RRGGBB, or #RRGGBBAA"
