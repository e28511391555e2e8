"""Exceptions raised by the typo checker.

Only :class:`DictionaryLoadError` is fatal. The others describe a single
span, file or directory that could not be checked; callers log them and
carry on with the rest of the run.
"""

from __future__ import annotations

from pathlib import Path


class TypoCheckError(Exception):
    """Base class for all typo checker failures."""


class DictionaryLoadError(TypoCheckError):
    """Raised when the typo dictionary cannot be read or has no entries."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to load dictionary {self.path}: {reason}")


class InvalidEscapeError(TypoCheckError, ValueError):
    """Raised when a string literal contains a malformed escape sequence."""

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


class FileReadError(TypoCheckError):
    """Raised when a file selected for checking cannot be read."""

    def __init__(self, path: str | Path, cause: BaseException | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to read contents of '{self.path}'{detail}")


class DirectoryReadError(TypoCheckError):
    """Raised when a directory cannot be listed."""

    def __init__(self, path: str | Path, cause: BaseException | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed reading files in directory '{self.path}'{detail}")
