"""Configuration for typo checking runs.

Settings come from three places, later ones winning: the defaults below, a
``.env`` file / the process environment (``TYPOCHECK_*`` variables) and the
command-line flags handled in :mod:`typocheck.typo_check.typo_check`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

# Only PHP sources are checked when walking directories, unless overridden
DEFAULT_FILE_EXTENSIONS = ["php"]

# Files with control bytes in this many leading bytes are treated as binary
BINARY_SNIFF_BYTES = 1024

_TRUE_VALUES = ("1", "true", "yes", "on")


def parse_extensions(value: str | Iterable[str] | None) -> list[str]:
    """Parse an extension allow-list such as ``"php,html"``.

    Leading dots and surrounding whitespace are dropped and the result is
    lower-cased. An empty value means "check every file".
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    extensions: list[str] = []
    for item in items:
        extension = item.strip().lstrip(".").lower()
        if extension and extension not in extensions:
            extensions.append(extension)
    return extensions


def load_ignore_words(path: str | Path | None) -> frozenset[str]:
    """Read a word-per-line ignore list.

    Blank lines and lines starting with ``#`` are skipped; words are compared
    case-insensitively so they are stored lower-cased. A missing file is
    logged and treated as an empty list.
    """
    if path is None:
        return frozenset()
    ignore_path = Path(path)
    try:
        contents = ignore_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.warning("Ignore-words file not found: %s", ignore_path)
        return frozenset()
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Could not read ignore-words file %s: %s", ignore_path, exc)
        return frozenset()

    words = set()
    for line in contents.splitlines():
        word = line.strip()
        if not word or word.startswith("#"):
            continue
        words.add(word.lower())
    return frozenset(words)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_path(name: str) -> Optional[Path]:
    raw = os.environ.get(name, "").strip()
    return Path(raw) if raw else None


@dataclass
class TypoCheckConfig:
    """Options for one typo checking run.

    Attributes:
        with_context: print the trimmed source line under each finding
        plaintext: scan every file as plain text, even PHP sources
        file_extensions: extensions checked when walking directories; an
            empty list checks every file
        dictionary_path: dictionary to load instead of the bundled one
        ignore_words_file: optional word-per-line list of words never reported
        report_path: where to write the Markdown report (CSV goes alongside)
        check_tokens: when False the host plugin skips whole-file scans
    """

    with_context: bool = False
    plaintext: bool = False
    file_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS))
    dictionary_path: Optional[Path] = None
    ignore_words_file: Optional[Path] = None
    report_path: Optional[Path] = None
    check_tokens: bool = True

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "TypoCheckConfig":
        """Build a config from ``TYPOCHECK_*`` environment variables.

        A ``.env`` file is loaded first; variables already set in the
        environment are not overridden by it.
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path=Path(dotenv_path), override=False)
        else:
            load_dotenv(override=False)

        config = cls(
            with_context=_env_flag("TYPOCHECK_WITH_CONTEXT", False),
            plaintext=_env_flag("TYPOCHECK_PLAINTEXT", False),
            dictionary_path=_env_path("TYPOCHECK_DICTIONARY"),
            ignore_words_file=_env_path("TYPOCHECK_IGNORE_WORDS_FILE"),
            check_tokens=_env_flag("TYPOCHECK_CHECK_TOKENS", True),
        )
        extensions = os.environ.get("TYPOCHECK_EXTENSIONS")
        if extensions is not None:
            config.file_extensions = parse_extensions(extensions)
        return config

    def load_ignore_words(self) -> frozenset[str]:
        return load_ignore_words(self.ignore_words_file)
