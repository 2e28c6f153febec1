"""Error codes and user-facing error formatting for Themesmith."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

from themesmith.core.models import ColorStyleConflictError, ScopeConflictError, ThemeParseError


class ErrorCode(Enum):
    """Standardized error codes for Themesmith operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    DISK_FULL = auto()
    PATH_INVALID = auto()
    FILE_READ_FAILED = auto()

    # Theme document errors
    THEME_PARSE_FAILED = auto()
    COLOR_CONFLICT = auto()
    SCOPE_CONFLICT = auto()

    # Operation errors
    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The theme file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or is a directory.",
    ErrorCode.FILE_READ_FAILED: "The theme file could not be read.",
    ErrorCode.THEME_PARSE_FAILED: "The file is not a valid theme JSON document.",
    ErrorCode.COLOR_CONFLICT: "Another color already uses that name or value.",
    ErrorCode.SCOPE_CONFLICT: "That scope already exists in this section.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See the log for details.",
}


@dataclass
class ThemesmithError(Exception):
    """Exception carrying an error code and context for display or logging."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" File: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" Details: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


def classify_exception(exc: Exception, path: Path | None = None) -> ThemesmithError:
    """Map an exception raised by the core or the file service to an error code."""
    if isinstance(exc, ThemesmithError):
        return exc
    original = {"original": str(exc)}
    if isinstance(exc, ThemeParseError):
        return ThemesmithError(ErrorCode.THEME_PARSE_FAILED, path=path, details=original)
    if isinstance(exc, ColorStyleConflictError):
        return ThemesmithError(ErrorCode.COLOR_CONFLICT, message=str(exc), path=path)
    if isinstance(exc, ScopeConflictError):
        return ThemesmithError(ErrorCode.SCOPE_CONFLICT, message=str(exc), path=path)
    if isinstance(exc, FileNotFoundError):
        return ThemesmithError(ErrorCode.FILE_NOT_FOUND, path=path, details=original)
    if isinstance(exc, PermissionError):
        return ThemesmithError(ErrorCode.FILE_ACCESS_DENIED, path=path, details=original)
    if isinstance(exc, (IsADirectoryError, NotADirectoryError)):
        return ThemesmithError(ErrorCode.PATH_INVALID, path=path, details=original)
    if isinstance(exc, UnicodeDecodeError):
        return ThemesmithError(ErrorCode.FILE_READ_FAILED, path=path, details=original)
    if isinstance(exc, OSError):
        exc_str = str(exc).lower()
        if "no space left" in exc_str or "disk full" in exc_str:
            return ThemesmithError(ErrorCode.DISK_FULL, path=path, details=original)
        return ThemesmithError(
            ErrorCode.OPERATION_FAILED,
            message=f"{type(exc).__name__}: {exc}",
            path=path,
            details=original,
        )
    return ThemesmithError(
        ErrorCode.OPERATION_FAILED,
        message=f"{type(exc).__name__}: {exc}",
        path=path,
        details=original,
    )


def format_error_for_user(error: ThemesmithError | Exception) -> str:
    """Format an error as a single-line notification."""
    if not isinstance(error, ThemesmithError):
        error = classify_exception(error)
    message = " ".join(error.message.split())
    if error.path:
        return f"{message} ({error.path.name})"
    return message
