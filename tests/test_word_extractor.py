from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typocheck.typo_check.word_extractor import (
    extract_identifier_parts,
    extract_identifier_parts_with_offsets,
    extract_words,
    looks_like_compound,
)


def test_extract_words_keeps_contractions_and_offsets() -> None:
    words = list(extract_words("I wasn't there at 10am"))

    assert words == [("wasn't", 2), ("there", 9), ("10am", 18)]


def test_extract_words_is_restartable() -> None:
    text = "teh recieve"
    assert list(extract_words(text)) == list(extract_words(text))


def test_extract_words_ignores_non_ascii_letters() -> None:
    assert [word for word, _ in extract_words("café naïve")] == ["caf"]


def test_identifier_parts() -> None:
    assert list(extract_identifier_parts("parseHTMLFile")) == ["parse", "HTML", "File"]
    assert list(extract_identifier_parts("XMLParser")) == ["XML", "Parser"]
    assert list(extract_identifier_parts("get_user_name")) == ["get", "user", "name"]
    assert list(extract_identifier_parts("getHTMLTeh")) == ["get", "HTML", "Teh"]
    assert list(extract_identifier_parts("MAX_SIZE")) == ["MAX", "SIZE"]


def test_identifier_parts_with_offsets() -> None:
    parts = list(extract_identifier_parts_with_offsets("myRecieveBuf"))

    assert parts == [("my", 0), ("Recieve", 2), ("Buf", 9)]


def test_looks_like_compound() -> None:
    assert looks_like_compound("getRecieve")
    assert looks_like_compound("HTMLParser")
    assert looks_like_compound("user_name")
    assert not looks_like_compound("Hello")
    assert not looks_like_compound("HELLO")
    assert not looks_like_compound("hello")
