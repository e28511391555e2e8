"""Candidate word extraction for free text and for identifiers.

Free text (comments, string contents, inline markup) is split into runs of
three or more letters/digits, optionally followed by an apostrophe suffix so
contractions such as ``wasn't`` stay in one piece.

Identifiers are split the "obvious" way into the words they are made of:
``parseHTMLFile`` -> ``parse``, ``HTML``, ``File``; ``get_user_name`` ->
``get``, ``user``, ``name``; ``XMLParser`` -> ``XML``, ``Parser``.
"""

from __future__ import annotations

import re
from typing import Iterator

# ASCII only; re.IGNORECASE alone would let e.g. the Kelvin sign match ``k``.
WORD_PATTERN = re.compile(r"[a-z0-9]{3,}(?:'[a-z]+)?", re.IGNORECASE | re.ASCII)

# A word is either:
#   1) a run of lowercase letters; or
#   2) an uppercase letter followed by lowercase letters; or
#   3) a run of uppercase letters not immediately followed by a lowercase
#      letter (the acronym in ``getHTTPResponse``)
IDENTIFIER_PART_PATTERN = re.compile(r"[a-z]+|[A-Z](?:[a-z]+|[A-Z]+(?![a-z]))")

_COMPOUND_WORD = re.compile(r"[a-z][A-Z]|[A-Z]{2}[a-z]|_")


def extract_words(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(word, offset)`` for every candidate word in ``text``."""
    for match in WORD_PATTERN.finditer(text):
        yield match.group(), match.start()


def extract_identifier_parts(text: str) -> Iterator[str]:
    """Yield the natural-language parts of an identifier."""
    for match in IDENTIFIER_PART_PATTERN.finditer(text):
        yield match.group()


def extract_identifier_parts_with_offsets(text: str) -> Iterator[tuple[str, int]]:
    """Like :func:`extract_identifier_parts`, with each part's offset in ``text``."""
    for match in IDENTIFIER_PART_PATTERN.finditer(text):
        yield match.group(), match.start()


def looks_like_compound(word: str) -> bool:
    """Return True if ``word`` has an internal case change or an underscore.

    Such words are usually identifiers quoted in comments or strings
    (``getRecieveBuffer``) and are worth decomposing when the whole word
    isn't a known typo.
    """
    return _COMPOUND_WORD.search(word) is not None
