"""The typo dictionary: misspelled word -> ordered list of corrections.

The file format is one ``typo->correction1,correction2,...`` entry per line.
When an entry has two or more fields the last one is a caveat explaining why
the fix may not always apply (often empty, e.g. ``accension->accession,
ascension,``). Lines without ``->`` are ignored.

A :class:`Dictionary` is built once by whoever drives the scan and is then
shared read-only between every file that is checked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from .errors import DictionaryLoadError

LOGGER = logging.getLogger(__name__)

SEPARATOR = "->"
DEFAULT_DICTIONARY_RESOURCE = "dictionary.txt"


def default_dictionary_path() -> Path:
    """Return the path of the dictionary bundled with the package."""
    return Path(str(resources.files("typocheck.data").joinpath(DEFAULT_DICTIONARY_RESOURCE)))


def parse_dictionary_text(text: str) -> dict[str, tuple[str, ...]]:
    """Parse dictionary file contents into a plain dict.

    Typos are used as written (the file is expected to be lower-case already);
    each correction is stripped of surrounding whitespace. Later entries for
    the same typo replace earlier ones.
    """
    entries: dict[str, tuple[str, ...]] = {}
    for line in text.split("\n"):
        line = line.strip()
        if SEPARATOR not in line:
            continue
        typo, corrections = line.split(SEPARATOR, 1)
        typo = typo.strip()
        if not typo:
            continue
        entries[typo] = tuple(field.strip() for field in corrections.split(","))
    return entries


class Dictionary(Mapping[str, tuple[str, ...]]):
    """Immutable mapping from lower-case typo to its corrections."""

    def __init__(self, entries: Mapping[str, tuple[str, ...]] | None = None, *, source: Path | None = None) -> None:
        self._entries: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {typo: tuple(corrections) for typo, corrections in (entries or {}).items()}
        )
        self.source = source

    @classmethod
    def load(cls, path: str | Path) -> "Dictionary":
        """Read and parse the dictionary at ``path``.

        Raises:
            DictionaryLoadError: if the file can't be read, is empty or has no
                ``->`` entries
        """
        dictionary_path = Path(path)
        try:
            contents = dictionary_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(dictionary_path, str(exc)) from exc
        if not contents.strip():
            raise DictionaryLoadError(dictionary_path, "file is empty")

        entries = parse_dictionary_text(contents)
        if not entries:
            raise DictionaryLoadError(dictionary_path, f"no '{SEPARATOR}' entries found")

        LOGGER.debug("Loaded %d dictionary entries from %s", len(entries), dictionary_path)
        return cls(entries, source=dictionary_path)

    @classmethod
    def load_default(cls) -> "Dictionary":
        return cls.load(default_dictionary_path())

    def lookup(self, word: str) -> tuple[str, ...] | None:
        """Return the corrections for ``word`` (already lower-cased), if any."""
        return self._entries.get(word)

    def __getitem__(self, word: str) -> tuple[str, ...]:
        return self._entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} entries, source={self.source})"
