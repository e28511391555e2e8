"""Text span dataclass shared between tokenizers and the scanner.

A span is a contiguous run of source text classified by kind. Tokenizers
produce them, the scanner consumes them; neither side mutates them.
"""
from __future__ import annotations

from dataclasses import dataclass

from .enums import SpanKind


@dataclass(frozen=True)
class TextSpan:
    """Immutable classified slice of a file.

    Attributes:
        kind: What kind of text this is (comment, identifier, ...)
        text: The raw source text exactly as it appears in the file
        start_line: 1-based line number of the first character of ``text``
    """

    kind: SpanKind
    text: str
    start_line: int = 1

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"{self.kind.value}@{self.start_line}: {self.text!r}"
