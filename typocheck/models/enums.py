"""Enumerations shared by the scanner, the CLI and the host plugin."""

from __future__ import annotations

from enum import Enum


class SpanKind(str, Enum):
    """Kinds of text span the scanner knows how to check.

    Values:
        STRING_LITERAL_ESCAPED: double-quoted or heredoc literal text, decoded
            with the full escape grammar
        STRING_LITERAL_RAW: single-quoted or nowdoc literal text
        IDENTIFIER: variable, function, class or constant names
        INLINE_TEXT: text outside of code (e.g. HTML around ``<?php`` tags)
        COMMENT: line, block and doc comments
    """

    STRING_LITERAL_ESCAPED = "StringLiteralEscaped"
    STRING_LITERAL_RAW = "StringLiteralRaw"
    IDENTIFIER = "Identifier"
    INLINE_TEXT = "InlineText"
    COMMENT = "Comment"

    @property
    def description(self) -> str:
        """Human readable description used in the batch output."""
        return _DESCRIPTIONS[self]

    @property
    def issue_name(self) -> str:
        """Issue type reported to an analysis host."""
        return _ISSUE_NAMES[self]

    @property
    def is_string_literal(self) -> bool:
        return self in (SpanKind.STRING_LITERAL_ESCAPED, SpanKind.STRING_LITERAL_RAW)

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


_DESCRIPTIONS = {
    SpanKind.STRING_LITERAL_ESCAPED: "a string literal",
    SpanKind.STRING_LITERAL_RAW: "a string literal",
    SpanKind.IDENTIFIER: "an identifier",
    SpanKind.INLINE_TEXT: "inline text",
    SpanKind.COMMENT: "a comment",
}

_ISSUE_NAMES = {
    SpanKind.STRING_LITERAL_ESCAPED: "PossibleTypoStringLiteral",
    SpanKind.STRING_LITERAL_RAW: "PossibleTypoStringLiteral",
    SpanKind.IDENTIFIER: "PossibleTypoIdentifier",
    SpanKind.INLINE_TEXT: "PossibleTypoInlineText",
    SpanKind.COMMENT: "PossibleTypoComment",
}


class ScanMode(str, Enum):
    """How a file's text is handed to the scanner.

    Values:
        TOKENIZED: the caller supplies classified spans from a tokenizer
        PLAIN_TEXT: the whole file is one inline text span starting at line 1
    """

    TOKENIZED = "Tokenized"
    PLAIN_TEXT = "PlainText"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
