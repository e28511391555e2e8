"""Typo check package exports.

This package exposes the scanner, its building blocks and the two front ends
(the batch CLI and the host plugin) so callers can import from
``typocheck.typo_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .dictionary import Dictionary
    from .errors import (
        DictionaryLoadError,
        DirectoryReadError,
        FileReadError,
        InvalidEscapeError,
        TypoCheckError,
    )
    from .line_counter import LineCounter
    from .plugin import HostIssue, TypoCheckPlugin
    from .report_utils import FileReport, build_report_csv, build_report_markdown
    from .scanner import TypoScanner, scan_file
    from .string_escapes import decode_literal, decode_with_newline_placeholder
    from .suggestions import filter_suggestions, format_suggestion_text
    from .tokenizer import get_tokenizer, tokenize_php
    from .typo_check import check_file, run_cli
    from .typo_check_config import TypoCheckConfig, load_ignore_words
    from .word_extractor import extract_identifier_parts, extract_words

__all__ = [
    "Dictionary",
    "DictionaryLoadError",
    "DirectoryReadError",
    "FileReadError",
    "InvalidEscapeError",
    "TypoCheckError",
    "LineCounter",
    "HostIssue",
    "TypoCheckPlugin",
    "FileReport",
    "build_report_csv",
    "build_report_markdown",
    "TypoScanner",
    "scan_file",
    "decode_literal",
    "decode_with_newline_placeholder",
    "filter_suggestions",
    "format_suggestion_text",
    "get_tokenizer",
    "tokenize_php",
    "check_file",
    "run_cli",
    "TypoCheckConfig",
    "load_ignore_words",
    "extract_identifier_parts",
    "extract_words",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "Dictionary": (".dictionary", "Dictionary"),
    "DictionaryLoadError": (".errors", "DictionaryLoadError"),
    "DirectoryReadError": (".errors", "DirectoryReadError"),
    "FileReadError": (".errors", "FileReadError"),
    "InvalidEscapeError": (".errors", "InvalidEscapeError"),
    "TypoCheckError": (".errors", "TypoCheckError"),
    "LineCounter": (".line_counter", "LineCounter"),
    "HostIssue": (".plugin", "HostIssue"),
    "TypoCheckPlugin": (".plugin", "TypoCheckPlugin"),
    "FileReport": (".report_utils", "FileReport"),
    "build_report_csv": (".report_utils", "build_report_csv"),
    "build_report_markdown": (".report_utils", "build_report_markdown"),
    "TypoScanner": (".scanner", "TypoScanner"),
    "scan_file": (".scanner", "scan_file"),
    "decode_literal": (".string_escapes", "decode_literal"),
    "decode_with_newline_placeholder": (".string_escapes", "decode_with_newline_placeholder"),
    "filter_suggestions": (".suggestions", "filter_suggestions"),
    "format_suggestion_text": (".suggestions", "format_suggestion_text"),
    "get_tokenizer": (".tokenizer", "get_tokenizer"),
    "tokenize_php": (".tokenizer", "tokenize_php"),
    "check_file": (".typo_check", "check_file"),
    "run_cli": (".typo_check", "run_cli"),
    "TypoCheckConfig": (".typo_check_config", "TypoCheckConfig"),
    "load_ignore_words": (".typo_check_config", "load_ignore_words"),
    "extract_identifier_parts": (".word_extractor", "extract_identifier_parts"),
    "extract_words": (".word_extractor", "extract_words"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    Submodules are only imported when used, which keeps
    ``typocheck.models`` and this package free of import cycles.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"typocheck.typo_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
