from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typocheck.models import ScanMode, SpanKind, TextSpan
from typocheck.typo_check.dictionary import Dictionary
from typocheck.typo_check.scanner import TypoScanner, scan_file


@pytest.fixture
def dictionary() -> Dictionary:
    return Dictionary(
        {
            "teh": ("the",),
            "recieve": ("receive",),
            "barr": ("bar",),
            "typoo": ("typo",),
            "wasnt": ("wasn't", "contraction reason text"),
            "accension": ("accession", "ascension", ""),
        }
    )


@pytest.fixture
def scanner(dictionary: Dictionary) -> TypoScanner:
    return TypoScanner(dictionary)


def test_case_variants_share_corrections(scanner: TypoScanner) -> None:
    findings = scanner.scan_text("recieve RECIEVE Recieve ReCiEvE")

    assert [finding.word for finding in findings] == ["recieve", "RECIEVE", "Recieve", "ReCiEvE"]
    assert all(finding.suggestions == ["receive"] for finding in findings)


def test_scanning_twice_gives_identical_results(scanner: TypoScanner) -> None:
    spans = [
        TextSpan(SpanKind.COMMENT, "// teh\n", 2),
        TextSpan(SpanKind.IDENTIFIER, "recieveData", 3),
        TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"teh\\nbarr"', 4),
    ]

    assert scanner.scan(spans) == scanner.scan(spans)


def test_comment_line_numbers(scanner: TypoScanner) -> None:
    findings = scanner.scan([TextSpan(SpanKind.COMMENT, "foo\nbarr\n", 10)])

    assert len(findings) == 1
    assert findings[0].word == "barr"
    assert findings[0].line == 11
    assert findings[0].span_kind is SpanKind.COMMENT


def test_escaped_newline_advances_line(scanner: TypoScanner) -> None:
    span = TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"line1\\nlinetwo-typoo"', 5)

    findings = scanner.scan([span])

    assert [(finding.word, finding.line) for finding in findings] == [("typoo", 6)]


def test_physical_newline_in_string_advances_line(scanner: TypoScanner) -> None:
    span = TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"first\nteh"', 2)

    assert [finding.line for finding in scanner.scan([span])] == [3]


def test_record_separator_in_literal_is_not_a_line_break(scanner: TypoScanner) -> None:
    spans = [
        TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"\\x1e typoo"', 5),
        TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"a\x1eb typoo"', 7),
    ]

    assert [(finding.word, finding.line) for finding in scanner.scan(spans)] == [("typoo", 5), ("typoo", 7)]


@pytest.mark.parametrize("escape", ["\\n", "\\x0a", "\\x0A", "\\012", "\\u{a}", "\\u{000A}"])
def test_numeric_newline_escapes_advance_line(scanner: TypoScanner, escape: str) -> None:
    span = TextSpan(SpanKind.STRING_LITERAL_ESCAPED, f'"first{escape}typoo"', 5)

    assert [(finding.word, finding.line) for finding in scanner.scan([span])] == [("typoo", 6)]


@pytest.mark.parametrize("escape", ["\\t", "\\r", "\\v", "\\f", "\\e", "\\x0b", "\\036", "\\u{1e}", "\\0"])
def test_other_control_escapes_keep_line(scanner: TypoScanner, escape: str) -> None:
    span = TextSpan(SpanKind.STRING_LITERAL_ESCAPED, f'"first{escape}typoo"', 5)

    assert [(finding.word, finding.line) for finding in scanner.scan([span])] == [("typoo", 5)]


def test_raw_literal_does_not_decode_backslash_n(scanner: TypoScanner) -> None:
    span = TextSpan(SpanKind.STRING_LITERAL_RAW, "'line1\\nlinetwo-typoo'", 5)

    findings = scanner.scan([span])

    assert [(finding.word, finding.line) for finding in findings] == [("typoo", 5)]
    assert findings[0].span_kind is SpanKind.STRING_LITERAL_RAW


def test_escaped_literal_is_matched_after_decoding(scanner: TypoScanner) -> None:
    # \x65 is "e"
    span = TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"t\\x65h"', 1)

    assert [finding.word for finding in scanner.scan([span])] == ["teh"]


def test_identifier_decomposition(scanner: TypoScanner) -> None:
    findings = scanner.scan([TextSpan(SpanKind.IDENTIFIER, "getHTMLTeh", 3)])

    assert len(findings) == 1
    finding = findings[0]
    assert finding.word == "Teh"
    assert finding.line == 3
    assert finding.suggestions == ["the"]
    assert finding.suggestion_text == 'Did you mean "The"?'
    assert finding.span_kind is SpanKind.IDENTIFIER


def test_identifier_parts_all_use_span_line(scanner: TypoScanner) -> None:
    findings = scanner.scan([TextSpan(SpanKind.IDENTIFIER, "teh_recieve_barr", 8)])

    assert [(finding.word, finding.line) for finding in findings] == [
        ("teh", 8),
        ("recieve", 8),
        ("barr", 8),
    ]


def test_identifier_with_unusable_suggestion_is_suppressed(scanner: TypoScanner) -> None:
    assert scanner.scan([TextSpan(SpanKind.IDENTIFIER, "isWasnt", 1)]) == []


def test_same_word_in_comment_is_reported(scanner: TypoScanner) -> None:
    findings = scanner.scan([TextSpan(SpanKind.COMMENT, "# it wasnt me", 1)])

    assert [finding.word for finding in findings] == ["wasnt"]
    assert findings[0].suggestions == ["wasn't", "contraction reason text"]


def test_plain_text_mode(scanner: TypoScanner) -> None:
    findings = scanner.scan_text("Recieve the form")

    assert len(findings) == 1
    finding = findings[0]
    assert finding.word == "Recieve"
    assert finding.line == 1
    assert finding.span_kind is SpanKind.INLINE_TEXT
    assert "Receive" in finding.suggestion_text


def test_plain_text_mode_relabels_spans(scanner: TypoScanner) -> None:
    spans = [TextSpan(SpanKind.IDENTIFIER, "tehValue", 4)]

    findings = scanner.scan(spans, ScanMode.PLAIN_TEXT)

    # as plain text "tehValue" is one word, found through its parts
    assert [(finding.word, finding.span_kind, finding.line) for finding in findings] == [
        ("teh", SpanKind.INLINE_TEXT, 4)
    ]


def test_compound_word_in_comment_is_decomposed(scanner: TypoScanner) -> None:
    span = TextSpan(SpanKind.COMMENT, "/*\n * call getRecieveBuffer() first\n */", 20)

    findings = scanner.scan([span])

    assert [(finding.word, finding.line) for finding in findings] == [("Recieve", 21)]


def test_ordinary_capitalised_word_is_not_decomposed(scanner: TypoScanner) -> None:
    assert scanner.scan_text("Tehran is a city") == []


def test_invalid_escape_skips_only_that_span(
    scanner: TypoScanner, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    spans = [
        TextSpan(SpanKind.STRING_LITERAL_ESCAPED, '"teh \\u{zz}"', 1),
        TextSpan(SpanKind.COMMENT, "// teh", 2),
    ]

    findings = scanner.scan(spans)

    assert [(finding.word, finding.line) for finding in findings] == [("teh", 2)]
    assert "invalid escape sequence" in caplog.text


def test_findings_follow_span_order(scanner: TypoScanner) -> None:
    spans = [
        TextSpan(SpanKind.COMMENT, "// barr teh", 9),
        TextSpan(SpanKind.INLINE_TEXT, "<p>recieve</p>", 1),
    ]

    assert [finding.word for finding in scanner.scan(spans)] == ["barr", "teh", "recieve"]


def test_multi_line_comment_lines(scanner: TypoScanner) -> None:
    span = TextSpan(SpanKind.COMMENT, "/**\n * teh\n * recieve\n */", 4)

    assert [finding.line for finding in scanner.scan([span])] == [5, 6]


def test_scan_file_without_tokens_is_plain_text(dictionary: Dictionary) -> None:
    findings = scan_file("one\ntwo teh\n", None, dictionary=dictionary)

    assert [(finding.word, finding.line, finding.span_kind) for finding in findings] == [
        ("teh", 2, SpanKind.INLINE_TEXT)
    ]


def test_scan_file_with_tokens(dictionary: Dictionary) -> None:
    tokens = [TextSpan(SpanKind.COMMENT, "// accension", 3)]

    findings = scan_file("<?php\n\n// accension\n", tokens, dictionary=dictionary)

    assert len(findings) == 1
    assert findings[0].suggestion_text == 'Did you mean "accession" or "ascension"?'
