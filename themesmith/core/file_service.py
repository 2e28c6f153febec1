"""File access for theme documents.

OSError subclasses (missing file, permission denied, disk full) propagate
unchanged; callers decide how to report them.
"""

from __future__ import annotations

from pathlib import Path

from themesmith.core.codec import decode_theme_with_warnings, encode_theme
from themesmith.core.models import Theme

THEME_FILE_SUFFIX = ".json"


def read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text(path: str | Path, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")


def list_theme_files(directory: str | Path, suffix: str = THEME_FILE_SUFFIX) -> list[str]:
    """Return sorted file names in ``directory`` ending with ``suffix``."""
    root = Path(directory)
    if not root.is_dir():
        return []
    wanted = suffix.lower()
    return sorted(
        child.name
        for child in root.iterdir()
        if child.is_file() and child.name.lower().endswith(wanted)
    )


def load_theme_file(path: str | Path) -> tuple[Theme, list[str]]:
    return decode_theme_with_warnings(read_text(path))


def save_theme_file(path: str | Path, theme: Theme) -> None:
    """Encode the whole document first, then write it in one call."""
    write_text(path, encode_theme(theme))
