"""Public model exports for the project.

Keep the :mod:`typocheck` namespace clean; tests and other modules should
import ``from typocheck.models import TypoFinding, SpanKind``.
"""

from __future__ import annotations

from .enums import ScanMode, SpanKind
from .text_span import TextSpan
from .typo_finding import TypoFinding

__all__ = ["ScanMode", "SpanKind", "TextSpan", "TypoFinding"]
