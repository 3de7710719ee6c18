"""Error types raised by the Name Screener."""

from __future__ import annotations

from pathlib import Path


class ScreeningError(Exception):
    """Base class for every error raised by the package."""


class InvalidInput(ScreeningError, ValueError):
    """A required input (name, path or column) is missing or blank."""


class FileUnavailable(ScreeningError, OSError):
    """A line source could not be read."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot read '{self.path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedPhoneticCharacter(ScreeningError, ValueError):
    """A letter has no Soundex mapping."""

    def __init__(self, character: str, text: str) -> None:
        self.character = character
        self.text = text
        super().__init__(f"The character '{character}' is not mapped by Soundex (in '{text}')")


__all__ = [
    "ScreeningError",
    "InvalidInput",
    "FileUnavailable",
    "UnsupportedPhoneticCharacter",
]
