"""Incremental offset -> line mapping within a single span."""

from __future__ import annotations


class LineCounter:
    """Map offsets in one span's text to 0-based line counts.

    The counter remembers the last offset it was asked about, so a series of
    nearby queries (the usual case: matches visited left to right) only
    scans the text between consecutive offsets. Queries may also move
    backwards.

    Only ``"\\n"`` counts as a line break. The scanner counts string
    literals over their decoded text, where a newline written as an escape
    is already a ``"\\n"``.
    """

    def __init__(self, text: str) -> None:
        self.counting_text = text
        self.length = len(text)
        self.last_offset = 0
        self.last_line = 0

    def line_for_offset(self, offset: int) -> int:
        """Return the number of line breaks before ``offset``.

        Offsets are clamped into ``[0, len(text)]``. Add the result to the
        span's start line to get an absolute line number.
        """
        offset = max(0, min(offset, self.length))
        if offset > self.last_offset:
            self.last_line += self.counting_text.count("\n", self.last_offset, offset)
        elif offset < self.last_offset:
            self.last_line -= self.counting_text.count("\n", offset, self.last_offset)
        self.last_offset = offset
        return self.last_line
