"""The typo scanner: classified spans in, typo findings out.

Each span is handled according to its kind:

- escaped string literals are decoded with the double-quoted grammar and
  scanned as free text; lines are counted over the decoded text, so only
  escapes that decode to a real newline count as line breaks
- raw string literals are decoded with the single-quoted grammar
- comments and inline text are scanned as they are
- identifiers are split into their words and reported on the span's line

Findings come out in span order, and within a span from left to right.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

from typocheck.models import ScanMode, SpanKind, TextSpan, TypoFinding

from .dictionary import Dictionary
from .errors import InvalidEscapeError
from .line_counter import LineCounter
from .string_escapes import DOUBLE_QUOTE, decode_literal
from .suggestions import filter_suggestions
from .word_extractor import (
    extract_identifier_parts,
    extract_identifier_parts_with_offsets,
    extract_words,
    looks_like_compound,
)

LOGGER = logging.getLogger(__name__)


class TypoScanner:
    """Scan spans of one file against a shared, read-only dictionary."""

    def __init__(self, dictionary: Dictionary) -> None:
        self.dictionary = dictionary

    def scan(self, spans: Iterable[TextSpan], mode: ScanMode = ScanMode.TOKENIZED) -> list[TypoFinding]:
        """Return every finding in ``spans``.

        In :attr:`ScanMode.PLAIN_TEXT` every span is treated as inline text,
        whatever kind it was given.
        """
        return list(self.iter_findings(spans, mode))

    def iter_findings(self, spans: Iterable[TextSpan], mode: ScanMode = ScanMode.TOKENIZED) -> Iterator[TypoFinding]:
        for span in spans:
            if mode is ScanMode.PLAIN_TEXT and span.kind is not SpanKind.INLINE_TEXT:
                span = TextSpan(SpanKind.INLINE_TEXT, span.text, span.start_line)
            yield from self._scan_span(span)

    def scan_text(self, text: str, start_line: int = 1) -> list[TypoFinding]:
        """Scan ``text`` in plain text mode."""
        return self.scan([TextSpan(SpanKind.INLINE_TEXT, text, start_line)], ScanMode.PLAIN_TEXT)

    def _scan_span(self, span: TextSpan) -> Iterator[TypoFinding]:
        kind = span.kind
        if kind is SpanKind.IDENTIFIER:
            yield from self._analyze_identifier(span)
            return

        if kind is SpanKind.STRING_LITERAL_ESCAPED:
            try:
                text = decode_literal(span.text, DOUBLE_QUOTE)
            except InvalidEscapeError as exc:
                LOGGER.info(
                    "Skipping string literal on line %d with an invalid escape sequence: %s",
                    span.start_line,
                    exc,
                )
                return
        elif kind is SpanKind.STRING_LITERAL_RAW:
            text = decode_literal(span.text, None)
        else:
            text = span.text

        # Escaped and physical newlines both decode to "\n"
        yield from self._analyze_text(text, span, LineCounter(text))

    def _analyze_text(self, text: str, span: TextSpan, counter: LineCounter) -> Iterator[TypoFinding]:
        for word, offset in extract_words(text):
            suggestions = self.dictionary.lookup(word.lower())
            if suggestions is not None:
                yield self._make_finding(word, span, span.start_line + counter.line_for_offset(offset), suggestions)
                continue

            # Code quoted in prose, e.g. "call getRecieveBuffer() first"
            if not looks_like_compound(word):
                continue
            parts = list(extract_identifier_parts_with_offsets(word))
            if len(parts) < 2:
                continue
            for part, part_offset in parts:
                part_suggestions = self.dictionary.lookup(part.lower())
                if part_suggestions is None:
                    continue
                line = span.start_line + counter.line_for_offset(offset + part_offset)
                yield self._make_finding(part, span, line, part_suggestions)

    def _analyze_identifier(self, span: TextSpan) -> Iterator[TypoFinding]:
        for word in extract_identifier_parts(span.text):
            suggestions = self.dictionary.lookup(word.lower())
            if suggestions is None:
                continue
            filtered = filter_suggestions(suggestions, context_is_identifier=True)
            if filtered is None:
                continue
            yield self._make_finding(word, span, span.start_line, filtered)

    @staticmethod
    def _make_finding(word: str, span: TextSpan, line: int, suggestions: Sequence[str]) -> TypoFinding:
        return TypoFinding(
            word=word,
            span_kind=span.kind,
            line=line,
            suggestions=list(suggestions),
        )


def scan_file(
    file_text: str,
    tokens: Sequence[TextSpan] | None,
    *,
    dictionary: Dictionary,
) -> list[TypoFinding]:
    """Scan one file for an analysis host.

    When ``tokens`` is ``None`` the file is scanned as plain text; otherwise
    the host's spans are scanned and ``file_text`` is only used by the host
    for presentation.
    """
    scanner = TypoScanner(dictionary)
    if tokens is None:
        return scanner.scan_text(file_text)
    return scanner.scan(tokens, ScanMode.TOKENIZED)
