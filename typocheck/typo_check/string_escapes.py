"""Decoding of escape sequences inside quoted string literals.

Only what is needed to see the literal the way it looks at runtime is
handled: the double-quoted grammar (``\\n``, ``\\x41``, ``\\101``,
``\\u{1F600}``, ...) and the single-quoted grammar (``\\'`` and ``\\\\``).
The decoded text is used both for word matching and for line counting. A
"placeholder" decode that marks escaped newlines is also available.
"""

from __future__ import annotations

import re

from .errors import InvalidEscapeError

# Stands in for a newline that came from an escape sequence rather than
# from a physical line break in the source.
NEWLINE_PLACEHOLDER = "\x1e"

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
}
_OCTAL_DIGITS = frozenset("01234567")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_MAX_CODE_POINT = 0x10FFFF

_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")


def _scan_digits(text: str, start: int, digits: frozenset[str], limit: int) -> int:
    """Return the end index of a run of at most ``limit`` ``digits`` at ``start``."""
    end = start
    stop = min(len(text), start + limit)
    while end < stop and text[end] in digits:
        end += 1
    return end


def _decode_unicode(text: str, backslash: int, strict: bool) -> tuple[str, int]:
    """Decode ``\\u{...}`` starting at ``backslash``; returns (decoded, next index)."""
    length = len(text)
    brace = backslash + 2
    if brace >= length:
        if strict:
            raise InvalidEscapeError("truncated unicode escape", backslash)
        return "\\u", brace
    if text[brace] != "{":
        # A bare \u is not an escape
        return "\\u", brace

    close = text.find("}", brace + 1)
    digits = text[brace + 1 : close] if close >= 0 else ""
    valid = bool(digits) and all(char in _HEX_DIGITS for char in digits)
    if valid and int(digits, 16) > _MAX_CODE_POINT:
        valid = False
    if not valid:
        if strict:
            raise InvalidEscapeError("invalid unicode escape", backslash)
        return "\\u", brace
    return chr(int(digits, 16)), close + 1


def _decode_double_quoted(
    text: str,
    quote: str | None,
    *,
    placeholder: str | None = None,
    strict: bool = True,
) -> str:
    parts: list[str] = []
    length = len(text)
    index = 0
    while True:
        backslash = text.find("\\", index)
        if backslash < 0:
            parts.append(text[index:])
            break
        parts.append(text[index:backslash])
        if backslash + 1 >= length:
            parts.append("\\")
            break

        char = text[backslash + 1]
        index = backslash + 2
        if char in _SIMPLE_ESCAPES:
            decoded = _SIMPLE_ESCAPES[char]
        elif quote is not None and char == quote:
            decoded = char
        elif char in _OCTAL_DIGITS:
            end = _scan_digits(text, backslash + 1, _OCTAL_DIGITS, 3)
            decoded = chr(int(text[backslash + 1 : end], 8) & 0xFF)
            index = end
        elif char == "x":
            end = _scan_digits(text, backslash + 2, _HEX_DIGITS, 2)
            if end > backslash + 2:
                decoded = chr(int(text[backslash + 2 : end], 16))
                index = end
            elif backslash + 2 >= length and strict:
                raise InvalidEscapeError("truncated hexadecimal escape", backslash)
            else:
                decoded = "\\x"
        elif char == "u":
            decoded, index = _decode_unicode(text, backslash, strict)
        else:
            # Unknown escapes are left untouched, backslash included
            decoded = "\\" + char

        if placeholder is not None and decoded == "\n":
            decoded = placeholder
        parts.append(decoded)
    return "".join(parts)


def _decode_single_quoted(text: str) -> str:
    return _SINGLE_QUOTED_ESCAPE.sub(r"\1", text)


def _split_quotes(raw: str, quote: str) -> tuple[str, str | None]:
    """Split a literal wrapped in ``quote`` into (body, quote).

    Accepts an optional ``b``/``B`` binary prefix. Text that isn't wrapped in
    a matching pair of ``quote`` is returned unchanged with ``None``.
    """
    literal = raw
    if literal[:1] in ("b", "B") and literal[1:2] == quote:
        literal = literal[1:]
    if len(literal) >= 2 and literal[0] == quote and literal[-1] == quote:
        return literal[1:-1], quote
    return raw, None


def parse_escape_sequences(text: str, quote: str | None = DOUBLE_QUOTE) -> str:
    """Decode the body of a literal (no surrounding quotes).

    ``quote`` selects the grammar: ``'"'`` for double-quoted strings,
    ``"'"`` for single-quoted strings and ``None`` for heredoc bodies, which
    use the double-quoted grammar but keep ``\\"`` as written.

    Raises:
        InvalidEscapeError: for a malformed ``\\u{...}`` or a truncated
            ``\\x``/``\\u`` escape at the end of ``text``
    """
    if quote == SINGLE_QUOTE:
        return _decode_single_quoted(text)
    return _decode_double_quoted(text, quote)


def decode_literal(raw: str, quote_style: str | None = DOUBLE_QUOTE) -> str:
    """Decode a string literal exactly as the tokenizer captured it.

    ``quote_style`` is the quoting convention of the span:

    - ``'"'``: a ``"..."`` literal (optionally ``b``-prefixed) or an
      unquoted body between interpolations, decoded with the double-quoted
      grammar
    - ``"'"``: a ``'...'`` literal or unquoted text, decoded with the
      single-quoted grammar
    - ``None``: a raw span; a ``'...'`` literal is decoded with the
      single-quoted grammar and unquoted text (a nowdoc body) is kept as is

    Only quotes of the span's own convention are stripped, so an unquoted
    body that happens to start and end with the other quote character is
    decoded as a body.
    """
    body, quote = _split_quotes(raw, quote_style or SINGLE_QUOTE)
    if quote is not None:
        return parse_escape_sequences(body, quote)
    if quote_style is None:
        return raw
    return parse_escape_sequences(raw, quote_style)


def decode_with_newline_placeholder(raw: str, quote_style: str | None = DOUBLE_QUOTE) -> str:
    """Decode like :func:`decode_literal` but mark escaped newlines.

    Every escape sequence that decodes to ``"\\n"`` becomes
    :data:`NEWLINE_PLACEHOLDER`, while physical newlines stay as they are.
    Malformed escapes are kept as written instead of raising. When
    :func:`decode_literal` succeeds on ``raw`` both results have the same
    length, so offsets into one index the other.

    The placeholder is an ordinary character and may also occur in the
    literal itself. Count lines over the :func:`decode_literal` result,
    where escaped and physical newlines are both ``"\\n"``.
    """
    body, quote = _split_quotes(raw, quote_style or SINGLE_QUOTE)
    if quote is None:
        if quote_style is None:
            return raw
        body, quote = raw, quote_style
    if quote == SINGLE_QUOTE:
        return _decode_single_quoted(body)
    return _decode_double_quoted(body, quote, placeholder=NEWLINE_PLACEHOLDER, strict=False)
