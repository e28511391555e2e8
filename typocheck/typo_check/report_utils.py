"""Utilities for generating typo check reports.

This module holds the Markdown and CSV report builders used by the batch
CLI. They only depend on :class:`FileReport`, so they can be tested without
scanning anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from typocheck.models import TypoFinding

from .suggestions import format_suggestion_text


@dataclass
class FileReport:
    """Findings for one checked file, in the order they were reported."""

    path: Path
    findings: list[TypoFinding] = field(default_factory=list)


def _format_corrections(finding: TypoFinding) -> str:
    """Return the corrections of ``finding`` without its caveat entry."""
    corrections = [suggestion.strip() for suggestion in finding.suggestions]
    if len(corrections) > 1:
        corrections = corrections[:-1]
    return ", ".join(corrections)


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def build_report_markdown(reports: Iterable[FileReport]) -> str:
    """Convert the collected file reports into Markdown output."""

    report_list = list(reports)
    total_files = len(report_list)
    total_findings = sum(len(report.findings) for report in report_list)

    kind_totals: dict[str, int] = {}
    for report in report_list:
        for finding in report.findings:
            kind_totals[finding.span_kind.value] = kind_totals.get(finding.span_kind.value, 0) + 1

    lines: list[str] = []
    lines.append("# Typo Check Report")
    lines.append("")
    lines.append(f"- Checked {total_files} file(s)")
    lines.append(f"- Possible typos found: {total_findings}")

    lines.append("")
    lines.append("## Totals by Kind")
    if kind_totals:
        for kind in sorted(kind_totals):
            lines.append(f"- {kind}: {kind_totals[kind]}")
    else:
        lines.append("- No possible typos found.")

    lines.append("")
    lines.append("---")
    lines.append("")
    lines.append("## File Details")
    if not report_list:
        lines.append("")
        lines.append("_No files found for checking._")
        return "\n".join(lines)

    for report in report_list:
        if not report.findings:
            continue
        lines.append("")
        lines.append(f"### {report.path}")
        lines.append("")
        lines.append(f"Found {len(report.findings)} possible typo(s).")
        lines.append("")
        lines.append("| Line | Word | Kind | Suggestions | Message |")
        lines.append("| --- | --- | --- | --- | --- |")
        for finding in report.findings:
            message = _escape_cell(format_suggestion_text(finding.suggestions, finding.word))
            lines.append(
                f"| {finding.line} | `{finding.word}` | {finding.span_kind.value} "
                f"| {_escape_cell(_format_corrections(finding))} | {message} |"
            )

    if total_findings == 0:
        lines.append("")
        lines.append("_No possible typos found._")

    return "\n".join(lines)


def build_report_csv(reports: Iterable[FileReport]) -> list[list[str]]:
    """Convert the collected file reports into CSV data.

    Returns a list of rows, where each row is a list of string values.
    The first row contains the column headers.
    """

    rows: list[list[str]] = []

    rows.append([
        "File",
        "Line",
        "Word",
        "Kind",
        "Suggestions",
        "Message",
    ])

    for report in reports:
        for finding in report.findings:
            rows.append([
                str(report.path),
                str(finding.line),
                finding.word,
                finding.span_kind.value,
                _format_corrections(finding),
                format_suggestion_text(finding.suggestions, finding.word),
            ])

    return rows
