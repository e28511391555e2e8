"""Batch typo checks for source files and folders.

This module walks the given files and directories, scans each file against
the typo dictionary and prints one line per possible typo. Exit status is
the number of typos printed, so a clean tree exits with 0.

PHP sources are tokenized so each word is reported with the kind of text it
was found in; every other file, or every file with ``--plaintext``, is
scanned as plain text.
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO

from typocheck.models import TypoFinding

from .dictionary import Dictionary
from .errors import DictionaryLoadError, DirectoryReadError, FileReadError
from .report_utils import FileReport, build_report_csv, build_report_markdown
from .scanner import TypoScanner
from .tokenizer import get_tokenizer
from .typo_check_config import (
    BINARY_SNIFF_BYTES,
    TypoCheckConfig,
    parse_extensions,
)

LOGGER = logging.getLogger(__name__)

MAX_EXIT_STATUS = 255

# CR is allowed as well as tab and LF so CRLF files are not binary
_ALLOWED_CONTROL_BYTES = frozenset(b"\t\n\r")
_LEADING_CURRENT_DIR = re.compile(r"^(\.[/\\]+)+")
_PATH_SEPARATORS = re.compile(r"[/\\]+")


def is_binary(data: bytes) -> bool:
    """Return True if the leading bytes of ``data`` contain control bytes."""
    for byte in data[:BINARY_SNIFF_BYTES]:
        if byte < 0x20 and byte not in _ALLOWED_CONTROL_BYTES:
            return True
    return False


def _path_sort_key(path: str) -> str:
    # Separators sort before any other character so a directory's files stay
    # together: "a/b" < "a.b" < "aab"
    return _PATH_SEPARATORS.sub("\0", path)


def _has_extension(path: str, file_extensions: list[str]) -> bool:
    if not file_extensions:
        return True
    return Path(path).suffix.lstrip(".").lower() in file_extensions


def iter_directory_files(directory: str | Path, file_extensions: list[str]) -> list[str]:
    """List the files under ``directory`` that should be checked.

    Symlinks are followed (each real directory is visited once). Files are
    filtered by ``file_extensions`` (empty means all), unreadable files are
    logged and skipped, and the result is sorted with path separators
    ordered before any other character.
    """

    def _on_error(exc: OSError) -> None:
        LOGGER.error("%s", DirectoryReadError(exc.filename or directory, exc))

    file_list: dict[str, str] = {}
    visited: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(directory, onerror=_on_error, followlinks=True):
        visited.add(os.path.realpath(dirpath))
        # Prune symlinked directories that lead somewhere already walked
        dirnames[:] = [
            name for name in dirnames if os.path.realpath(os.path.join(dirpath, name)) not in visited
        ]
        for filename in filenames:
            file_path = os.path.join(dirpath, filename)
            if not _has_extension(file_path, file_extensions):
                continue
            if not os.path.isfile(file_path) or not os.access(file_path, os.R_OK):
                if file_extensions:
                    LOGGER.warning("Unable to read file %s", os.path.realpath(file_path))
                continue
            normalised = _LEADING_CURRENT_DIR.sub("", file_path)
            file_list[normalised] = normalised

    return sorted(file_list, key=_path_sort_key)


def check_file(
    path: str | Path,
    scanner: TypoScanner,
    *,
    plaintext: bool = False,
    ignore_words: frozenset[str] = frozenset(),
) -> tuple[str, list[TypoFinding]]:
    """Scan one file and return its text and findings.

    Binary files produce no findings. Words on ``ignore_words`` (lower-cased)
    are dropped.

    Raises:
        FileReadError: if the file cannot be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise FileReadError(path, exc) from exc

    if is_binary(data):
        LOGGER.info("Skipping binary file %s", path)
        return "", []

    text = data.decode("utf-8", errors="replace")
    tokenizer = None if plaintext else get_tokenizer(path)
    if tokenizer is None:
        findings = scanner.scan_text(text)
    else:
        findings = scanner.scan(tokenizer(text))

    if ignore_words:
        findings = [finding for finding in findings if finding.word.lower() not in ignore_words]
    return text, findings


def format_finding(path: str | Path, finding: TypoFinding) -> str:
    return (
        f"{path}:{finding.line}: Saw a possible typo {json.dumps(finding.word)} "
        f"in {finding.description} ({finding.suggestion_text})"
    )


def _context_line(text: str, line: int) -> str:
    lines = text.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1].strip()
    return ""


def _iter_targets(paths: Iterable[str], file_extensions: list[str]) -> Iterator[str]:
    for raw_path in paths:
        if not os.path.exists(raw_path):
            LOGGER.error("Failed to find file/folder '%s'", raw_path)
            continue
        LOGGER.info("Checking %s %s", raw_path, json.dumps(file_extensions))
        if os.path.isdir(raw_path):
            yield from iter_directory_files(raw_path, file_extensions)
        else:
            # Explicitly named files are checked whatever their extension
            yield _LEADING_CURRENT_DIR.sub("", raw_path) or raw_path


def write_reports(reports: list[FileReport], report_path: Path) -> Path:
    """Write the Markdown report and a CSV report alongside it."""
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_report_markdown(reports), encoding="utf-8")

    csv_path = report_path.with_suffix(".csv")
    csv_rows = build_report_csv(reports)
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(csv_rows)
    return csv_path


def run_cli(
    paths: Iterable[str],
    config: TypoCheckConfig,
    dictionary: Dictionary,
    *,
    out: Optional[TextIO] = None,
) -> int:
    """Check ``paths``, print every finding and return how many were printed."""
    stream = out if out is not None else sys.stdout
    scanner = TypoScanner(dictionary)
    ignore_words = config.load_ignore_words()

    checked: set[str] = set()
    reports: list[FileReport] = []
    total = 0
    for file_path in _iter_targets(paths, config.file_extensions):
        if file_path in checked:
            continue
        checked.add(file_path)

        try:
            text, findings = check_file(
                file_path,
                scanner,
                plaintext=config.plaintext,
                ignore_words=ignore_words,
            )
        except FileReadError as exc:
            LOGGER.error("%s", exc)
            continue

        for finding in findings:
            print(format_finding(file_path, finding), file=stream)
            if config.with_context:
                print(f"    {_context_line(text, finding.line)}", file=stream)
        total += len(findings)
        reports.append(FileReport(Path(file_path), findings))

    if config.report_path is not None:
        csv_path = write_reports(reports, config.report_path)
        LOGGER.info("Typo report written to %s", config.report_path.resolve())
        LOGGER.info("CSV report written to %s", csv_path.resolve())

    return total


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typocheck",
        description="Check PHP sources and other text files for common typos.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Files or folders to check. Folders are searched recursively.",
    )
    parser.add_argument(
        "-p",
        "--plaintext",
        action="store_true",
        default=None,
        help="Scan the files as plain text instead of as PHP.",
    )
    parser.add_argument(
        "--extensions",
        default=None,
        help="When checking folders, only check files with these comma separated "
        "extensions (default: php). An empty value checks every file.",
    )
    parser.add_argument(
        "--with-context",
        action="store_true",
        default=None,
        help="Print the source line under each possible typo.",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=None,
        help="Dictionary of typo->correction entries (default: the bundled dictionary).",
    )
    parser.add_argument(
        "--ignore-words-file",
        type=Path,
        default=None,
        help="File with one word per line that should never be reported.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Also write a Markdown report to this path, and a CSV report next to it.",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Read TYPOCHECK_* settings from this .env file.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def build_config(args: argparse.Namespace) -> TypoCheckConfig:
    """Merge environment settings with the command-line flags."""
    config = TypoCheckConfig.from_env(args.dotenv)
    if args.plaintext is not None:
        config.plaintext = args.plaintext
    if args.with_context is not None:
        config.with_context = args.with_context
    if args.extensions is not None:
        config.file_extensions = parse_extensions(args.extensions)
    if args.dictionary is not None:
        config.dictionary_path = args.dictionary
    if args.ignore_words_file is not None:
        config.ignore_words_file = args.ignore_words_file
    if args.report is not None:
        config.report_path = args.report
    return config


def main(argv: Optional[Iterable[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)
    config = build_config(args)

    try:
        if config.dictionary_path is not None:
            dictionary = Dictionary.load(config.dictionary_path)
        else:
            dictionary = Dictionary.load_default()
    except DictionaryLoadError as exc:
        LOGGER.error("%s", exc)
        return 2

    count = run_cli(args.paths, config, dictionary)
    return min(count, MAX_EXIT_STATUS)


if __name__ == "__main__":
    raise SystemExit(main())
