"""Pydantic model representing a single possible typo found by the scanner.

Findings are created by the scanner and consumed straight away by whoever
asked for them (the CLI printer, the report builders or a host plugin). The
validators keep the invariants the printers rely on: a non-empty word, a
1-based line and at least one suggestion.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typocheck.typo_check.suggestions import format_suggestion_text

from .enums import SpanKind


class TypoFinding(BaseModel):
    """One reported candidate misspelling.

    Contract:
    - word: the word as it appeared after decoding (original casing)
    - span_kind: the kind of span the word was found in
    - line: absolute 1-based line number in the scanned file
    - suggestions: raw dictionary suggestions (not re-cased). When there are
      two or more entries the last one is a caveat, possibly empty.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    word: str
    span_kind: SpanKind
    line: int = Field(ge=1)
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("word", mode="before")
    def _strip_word(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("word must not be empty")
        return result

    @field_validator("suggestions", mode="before")
    def _normalise_suggestions(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(x) for x in value]
        # allow a single suggestion as a bare string
        return [str(value)]

    @field_validator("suggestions")
    def _require_suggestions(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("suggestions must not be empty")
        return value

    @property
    def suggestion_text(self) -> str:
        """The ``Did you mean ...?`` text, re-cased to match ``word``."""
        return format_suggestion_text(self.suggestions, self.word)

    @property
    def description(self) -> str:
        return self.span_kind.description
