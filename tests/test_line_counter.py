from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typocheck.typo_check.line_counter import LineCounter


def test_counts_newlines_before_offset() -> None:
    counter = LineCounter("a\nb\nc")

    assert counter.line_for_offset(0) == 0
    assert counter.line_for_offset(2) == 1
    assert counter.line_for_offset(4) == 2


def test_supports_backwards_queries() -> None:
    counter = LineCounter("one\ntwo\nthree\nfour")

    assert counter.line_for_offset(15) == 3
    assert counter.line_for_offset(5) == 1
    assert counter.line_for_offset(9) == 2
    assert counter.last_offset == 9
    assert counter.last_line == 2


def test_offsets_are_clamped() -> None:
    counter = LineCounter("a\nb\n")

    assert counter.line_for_offset(100) == 2
    assert counter.last_offset == 4
    assert counter.line_for_offset(-5) == 0


def test_record_separator_is_not_a_line_break() -> None:
    text = "first\x1esecond\nthird"
    counter = LineCounter(text)

    assert counter.line_for_offset(text.index("second")) == 0
    assert counter.line_for_offset(text.index("third")) == 1
