"""Dictionary-driven typo scanner for source code and plain text."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "models",
    "typo_check",
]
