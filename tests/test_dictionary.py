from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typocheck.typo_check.dictionary import (
    Dictionary,
    default_dictionary_path,
    parse_dictionary_text,
)
from typocheck.typo_check.errors import DictionaryLoadError


def test_parse_dictionary_text_skips_lines_without_separator() -> None:
    text = "# typos\n\nteh->the\naccension->accession, ascension,\nnot an entry\n"

    entries = parse_dictionary_text(text)

    assert entries == {
        "teh": ("the",),
        "accension": ("accession", "ascension", ""),
    }


def test_load_reads_entries(tmp_path: Path) -> None:
    path = tmp_path / "dictionary.txt"
    path.write_text("teh->the\nrecieve->receive\n", encoding="utf-8")

    dictionary = Dictionary.load(path)

    assert len(dictionary) == 2
    assert dictionary.lookup("recieve") == ("receive",)
    assert dictionary.lookup("receive") is None
    assert "teh" in dictionary
    assert dictionary.source == path


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DictionaryLoadError) as excinfo:
        Dictionary.load(tmp_path / "missing.txt")
    assert "missing.txt" in str(excinfo.value)


def test_load_empty_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("  \n", encoding="utf-8")

    with pytest.raises(DictionaryLoadError, match="empty"):
        Dictionary.load(path)


def test_load_file_without_entries_raises(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("the\nreceive\n", encoding="utf-8")

    with pytest.raises(DictionaryLoadError):
        Dictionary.load(path)


def test_dictionary_is_read_only() -> None:
    dictionary = Dictionary({"teh": ("the",)})

    with pytest.raises(TypeError):
        dictionary["teh"] = ("tea",)  # type: ignore[index]
    assert dictionary["teh"] == ("the",)


def test_bundled_dictionary_loads() -> None:
    assert default_dictionary_path().is_file()

    dictionary = Dictionary.load_default()

    assert dictionary.lookup("teh") == ("the",)
    assert dictionary.lookup("recieve") == ("receive",)
    assert dictionary.lookup("wasnt") == ("wasn't",)
    # every multi-field entry keeps its trailing caveat field
    assert dictionary.lookup("accension") == ("accession", "ascension", "")
    assert all(typo == typo.lower() for typo in dictionary)
