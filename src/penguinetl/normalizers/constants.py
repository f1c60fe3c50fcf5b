"""Constants shared by the value normalisers."""

from __future__ import annotations

NA_STRINGS: frozenset[str] = frozenset({"na", "n/a", "nan", "none", "null"})
"""Case-insensitive string markers treated as missing numeric or date values."""

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%Y%m%d",
    "%d.%m.%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S%z",
)
"""Explicit layouts tried after ISO-8601 parsing, in order."""
