"""Filtering and formatting of dictionary suggestions.

Suggestion lists come straight from the dictionary. With two or more entries
the last one is a caveat (usually empty) rather than a correction, so it is
never filtered and never shown as a replacement.
"""

from __future__ import annotations

import json
import re
from typing import Sequence

# Anything outside this class can't appear in a bare identifier.
_INVALID_IDENTIFIER_CHAR = re.compile(r"[^a-zA-Z0-9_\x7f-\xff]")
_LOWERCASE_LETTER = re.compile(r"[a-z]")


def is_valid_identifier_word(suggestion: str) -> bool:
    return _INVALID_IDENTIFIER_CHAR.search(suggestion) is None


def filter_suggestions(suggestions: Sequence[str], context_is_identifier: bool) -> list[str] | None:
    """Drop suggestions that couldn't replace the word in its context.

    In an identifier, corrections such as ``wasn't`` or ``re-use`` are not
    usable and are removed. Returns ``None`` when nothing but the caveat
    is left, meaning the finding should not be reported at all.
    """
    if not context_is_identifier:
        return list(suggestions)

    count = len(suggestions)
    kept: list[str] = []
    removed_any = False
    for index, suggestion in enumerate(suggestions):
        if is_valid_identifier_word(suggestion):
            kept.append(suggestion)
            continue
        if count < 2 or index != count - 1:
            removed_any = True
            continue
        # the caveat is kept whatever it contains
        kept.append(suggestion)

    if removed_any and len(kept) <= 1:
        return None
    return kept


def _recase(suggestions: list[str], original_word: str) -> list[str]:
    first_lower = _LOWERCASE_LETTER.search(original_word)
    if first_lower is None:
        return [suggestion.upper() for suggestion in suggestions]
    if first_lower.start() > 0:
        return [suggestion[:1].upper() + suggestion[1:] for suggestion in suggestions]
    return suggestions


def format_suggestion_text(suggestions: Sequence[str], original_word: str) -> str:
    """Build the ``Did you mean "x" or "y"?`` message for a finding.

    Corrections are re-cased to follow ``original_word``: an all-uppercase
    word gets uppercase corrections, a capitalised word gets capitalised
    ones. A non-empty caveat is appended as ``: not always fixable: ...``.
    """
    cleaned = [suggestion.strip() for suggestion in suggestions]
    reason: str | None = None
    if len(cleaned) > 1:
        reason = cleaned.pop()

    corrections = _recase(cleaned, original_word)
    text = "Did you mean " + " or ".join(json.dumps(correction) for correction in corrections) + "?"
    if reason:
        text += f" : not always fixable: {reason}"
    return text
