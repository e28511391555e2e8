"""Adapter for running the typo checker inside a static-analysis host.

The host owns parsing, configuration and issue presentation. It creates one
:class:`TypoCheckPlugin` per process (so the dictionary is loaded once) and
calls it back:

- :meth:`TypoCheckPlugin.after_analyze_file` once per analysed file, to scan
  comments, strings, identifiers and inline text
- :meth:`TypoCheckPlugin.analyze_function_call` for calls to ``_``,
  ``gettext`` and ``ngettext``, to check translatable messages

Issues are handed to the host through an ``emit`` callback.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from typocheck.models import ScanMode

from .dictionary import Dictionary
from .scanner import TypoScanner
from .suggestions import format_suggestion_text
from .tokenizer import Tokenizer, tokenize_php

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .typo_check_config import TypoCheckConfig

GETTEXT_ISSUE_NAME = "PossibleTypoGettext"

# \w is Unicode-aware here
_GETTEXT_WORD = re.compile(r"\w{3,}(?:'\w+)?")

# function name -> how many leading arguments are messages
_GETTEXT_FUNCTIONS = {
    "_": 1,
    "gettext": 1,
    "ngettext": 2,
}


@dataclass(frozen=True)
class HostIssue:
    """An issue ready to be reported by the host.

    Attributes:
        issue_name: issue type, e.g. ``PossibleTypoComment``
        line: 1-based line the issue is reported on
        message: the issue text
        suggestion: ``Did you mean ...?`` text for the host's fix-it field
    """

    issue_name: str
    line: int
    message: str
    suggestion: str


Emit = Callable[[HostIssue], None]


class TypoCheckPlugin:
    """Report possible typos to an analysis host."""

    def __init__(
        self,
        dictionary: Optional[Dictionary] = None,
        ignore_words: Optional[Iterable[str]] = None,
        check_tokens: bool = True,
        tokenizer: Tokenizer = tokenize_php,
    ) -> None:
        # Loaded once per process
        self.dictionary = dictionary if dictionary is not None else Dictionary.load_default()
        self.ignore_words = frozenset(word.lower() for word in (ignore_words or ()))
        self.check_tokens = check_tokens
        self.tokenizer = tokenizer
        self._scanner = TypoScanner(self.dictionary)

    @classmethod
    def from_config(cls, config: "TypoCheckConfig") -> "TypoCheckPlugin":
        """Build a plugin from the host's typo check configuration.

        Loads ``config.dictionary_path`` (or the bundled dictionary), the
        ignore-words file and the ``check_tokens`` switch.

        Raises:
            DictionaryLoadError: if the configured dictionary can't be read
        """
        if config.dictionary_path is not None:
            dictionary = Dictionary.load(config.dictionary_path)
        else:
            dictionary = Dictionary.load_default()
        return cls(
            dictionary,
            ignore_words=config.load_ignore_words(),
            check_tokens=config.check_tokens,
        )

    def is_known_typo(self, word: str) -> bool:
        """Return True if ``word`` is on the ignore list (case-insensitive)."""
        return word.lower() in self.ignore_words

    def after_analyze_file(self, file_contents: str, emit: Emit) -> int:
        """Scan a whole file and emit an issue per possible typo.

        Returns the number of issues emitted.
        """
        if not self.check_tokens:
            return 0
        emitted = 0
        for finding in self._scanner.iter_findings(self.tokenizer(file_contents), ScanMode.TOKENIZED):
            if self.is_known_typo(finding.word):
                continue
            emit(
                HostIssue(
                    issue_name=finding.span_kind.issue_name,
                    line=finding.line,
                    message=f"Saw an invalid word {json.dumps(finding.word)}",
                    suggestion=finding.suggestion_text,
                )
            )
            emitted += 1
        return emitted

    def analyze_function_call(
        self,
        function_name: str,
        args: Sequence[object],
        line: int,
        emit: Emit,
    ) -> int:
        """Check the message arguments of a gettext-style call.

        Only arguments the host could resolve to a string are checked; other
        values (expressions, numbers, ``None``) are ignored. Returns the
        number of issues emitted.
        """
        message_count = _GETTEXT_FUNCTIONS.get(function_name.lstrip("\\").lower())
        if message_count is None:
            return 0
        emitted = 0
        for text in args[:message_count]:
            if isinstance(text, str):
                emitted += self._analyze_message(function_name, text, line, emit)
        return emitted

    def _analyze_message(self, function_name: str, text: str, line: int, emit: Emit) -> int:
        emitted = 0
        for word in _GETTEXT_WORD.findall(text):
            suggestions = self.dictionary.lookup(word.lower())
            if suggestions is None or self.is_known_typo(word):
                continue
            emit(
                HostIssue(
                    issue_name=GETTEXT_ISSUE_NAME,
                    line=line,
                    message=(
                        f"Call to {function_name}() was passed an invalid word "
                        f"{json.dumps(word)} in {json.dumps(text)}"
                    ),
                    suggestion=format_suggestion_text(suggestions, word),
                )
            )
            emitted += 1
        return emitted
