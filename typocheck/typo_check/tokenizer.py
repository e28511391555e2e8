"""Turn PHP source into the classified spans the scanner understands.

This is a thin adapter over pygments' ``PhpLexer``. Offsets come from
``get_tokens_unprocessed`` so every span can be sliced straight out of the
original text, and line numbers are computed from those offsets.

Double-quoted strings need the most care: pygments emits them as a run of
``String.Double``/``String.Escape``/``String.Interpol`` tokens. A string
without interpolation becomes one span, quotes included; a string with
interpolation becomes one quote-less span per literal segment.
"""

from __future__ import annotations

import bisect
import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator

from pygments.lexers.php import PhpLexer
from pygments.token import Comment, Name, Other, String, Token, _TokenType

from typocheck.models import SpanKind, TextSpan

LOGGER = logging.getLogger(__name__)

Tokenizer = Callable[[str], list[TextSpan]]

PHP_EXTENSIONS = frozenset({"php", "phtml", "inc"})

_COMMENT_TOKENS = (Comment.Single, Comment.Multiline, String.Doc)
_INTERPOLATION_OPENERS = frozenset({"{", "${", "{${"})
_INTERPOLATION_CLOSERS = frozenset({"}", "}}"})


class _LineIndex:
    """Answer "which line is this offset on" for one source text."""

    def __init__(self, text: str) -> None:
        self._newlines = [index for index, char in enumerate(text) if char == "\n"]

    def line_at(self, offset: int) -> int:
        return bisect.bisect_left(self._newlines, offset) + 1


def _is_identifier_token(token_type: _TokenType) -> bool:
    return token_type in Name and token_type is not Name.Variable


class _PhpSpanBuilder:
    """Accumulate spans while walking the pygments token stream."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.lines = _LineIndex(source)
        self.spans: list[TextSpan] = []

        # inline text outside <?php ... ?>
        self._inline_start: int | None = None
        self._inline_end = 0

        # double-quoted strings
        self._in_string = False
        self._string_start = 0
        self._interpolated = False
        self._interpolation_depth = 0
        self._segment_start: int | None = None
        self._segment_end = 0

        # heredoc / nowdoc
        self._heredoc_opened = False
        self._expect_heredoc_body = False

    def emit(self, kind: SpanKind, start: int, end: int) -> None:
        text = self.source[start:end]
        if text:
            self.spans.append(TextSpan(kind, text, self.lines.line_at(start)))

    def feed(self, index: int, token_type: _TokenType, value: str) -> None:
        if token_type is not Other:
            self._flush_inline()

        if self._in_string:
            self._feed_string(index, token_type, value)
            return

        if token_type is Other:
            if self._inline_start is None:
                self._inline_start = index
            self._inline_end = index + len(value)
        elif token_type in _COMMENT_TOKENS:
            self.emit(SpanKind.COMMENT, index, index + len(value))
        elif token_type is Name.Variable:
            stripped = value.lstrip("$")
            self.emit(SpanKind.IDENTIFIER, index + len(value) - len(stripped), index + len(value))
        elif _is_identifier_token(token_type):
            self.emit(SpanKind.IDENTIFIER, index, index + len(value))
        elif token_type is String.Single:
            self.emit(SpanKind.STRING_LITERAL_RAW, index, index + len(value))
        elif token_type is String.Double and value == '"':
            self._open_string(index)
        elif token_type is String or token_type is String.Delimiter:
            self._feed_heredoc(index, token_type, value)

    def _feed_heredoc(self, index: int, token_type: _TokenType, value: str) -> None:
        if token_type is String and value == "<<<":
            self._heredoc_opened = True
            return
        if token_type is String.Delimiter:
            self._expect_heredoc_body = self._heredoc_opened
            self._heredoc_opened = False
            return
        if not self._expect_heredoc_body:
            return
        self._expect_heredoc_body = False

        # The body token is ``[quote]\n<body>\n<indent>``
        kind = SpanKind.STRING_LITERAL_ESCAPED
        prefix = 0
        if value[:1] in ("'", '"'):
            if value[0] == "'":
                kind = SpanKind.STRING_LITERAL_RAW
            prefix = 1
        if value[prefix : prefix + 1] == "\n":
            prefix += 1
        end = index + len(value.rstrip(" \t"))
        if end > index + prefix and self.source[end - 1] == "\n":
            end -= 1
        self.emit(kind, index + prefix, end)

    def _open_string(self, index: int) -> None:
        self._in_string = True
        self._string_start = index
        self._interpolated = False
        self._interpolation_depth = 0
        self._segment_start = None

    def _flush_segment(self) -> None:
        if self._segment_start is not None:
            self.emit(SpanKind.STRING_LITERAL_ESCAPED, self._segment_start, self._segment_end)
        self._segment_start = None

    def _feed_string(self, index: int, token_type: _TokenType, value: str) -> None:
        if self._interpolation_depth:
            if token_type is String.Interpol:
                if value in _INTERPOLATION_OPENERS:
                    self._interpolation_depth += 1
                elif value in _INTERPOLATION_CLOSERS:
                    self._interpolation_depth -= 1
            return

        if token_type is String.Double and value == '"':
            self._in_string = False
            if self._interpolated:
                self._flush_segment()
            else:
                self.emit(SpanKind.STRING_LITERAL_ESCAPED, self._string_start, index + 1)
            return

        if token_type is String.Interpol:
            self._interpolated = True
            self._flush_segment()
            if value in _INTERPOLATION_OPENERS:
                self._interpolation_depth += 1
            else:
                # "$name", "$name[key]" or "$name->property"
                stripped = value.lstrip("$")
                self.emit(SpanKind.IDENTIFIER, index + len(value) - len(stripped), index + len(value))
            return

        if token_type is String.Double or token_type is String.Escape:
            if self._segment_start is None:
                self._segment_start = index
            self._segment_end = index + len(value)

    def _flush_inline(self) -> None:
        if self._inline_start is not None:
            self.emit(SpanKind.INLINE_TEXT, self._inline_start, self._inline_end)
            self._inline_start = None

    def finish(self) -> list[TextSpan]:
        self._flush_inline()
        if self._in_string:
            LOGGER.debug("Unterminated string literal starting at offset %d", self._string_start)
            self._flush_segment()
        return self.spans


def iter_php_tokens(text: str) -> Iterator[tuple[int, _TokenType, str]]:
    """Yield raw ``(offset, token type, value)`` triples from pygments."""
    lexer = PhpLexer(funcnamehighlighting=False)
    for index, token_type, value in lexer.get_tokens_unprocessed(text):
        if token_type is Token.Error:
            continue
        yield index, token_type, value


def tokenize_php(text: str) -> list[TextSpan]:
    """Split PHP source into comment, identifier, string and inline text spans."""
    # Line comments are only recognised up to a newline
    source = text if text.endswith("\n") else text + "\n"
    builder = _PhpSpanBuilder(source)
    for index, token_type, value in iter_php_tokens(source):
        builder.feed(index, token_type, value)
    return builder.finish()


_TOKENIZERS: dict[str, Tokenizer] = {extension: tokenize_php for extension in PHP_EXTENSIONS}


def get_tokenizer(path: str | Path) -> Tokenizer | None:
    """Return the tokenizer for ``path``'s extension, or None for plain text."""
    extension = Path(path).suffix.lstrip(".").lower()
    return _TOKENIZERS.get(extension)


def supported_extensions() -> Iterable[str]:
    return sorted(_TOKENIZERS)
