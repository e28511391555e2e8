"""Data files bundled with typocheck (the default typo dictionary)."""
