"""Canonicalisation of tabular header names.

Headers are turned into lower-case snake case identifiers in the spirit of
janitor's ``clean_names``::

    >>> canonicalize_column_name("Culmen Length (mm)")
    'culmen_length_mm'
    >>> canonicalize_column_name("studyName")
    'study_name'
    >>> canonicalize_column_name("Delta 15 N (o/oo)")
    'delta_15_n_o_oo'

The transformation is deterministic and idempotent: feeding a canonical name
back in returns it unchanged.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from typing import Final

import pandas as pd

__all__ = ["canonicalize_column_name", "canonicalize_names", "canonicalize_columns"]

_SYMBOL_WORDS: Final[tuple[tuple[str, str], ...]] = (
    ("%", "_percent_"),
    ("#", "_number_"),
)
_CAMEL_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_NON_ALNUM: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9]+")


def canonicalize_column_name(name: object) -> str:
    """Return the canonical snake case form of a single header ``name``."""

    text = unicodedata.normalize("NFKD", str(name))
    text = text.encode("ascii", "ignore").decode("ascii")
    for symbol, word in _SYMBOL_WORDS:
        text = text.replace(symbol, word)
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    text = _NON_ALNUM.sub("_", text).strip("_").lower()
    if not text:
        return "x"
    if text[0].isdigit():
        return f"x{text}"
    return text


def canonicalize_names(names: Iterable[object]) -> list[str]:
    """Canonicalise ``names`` and make collisions unique with ``_2``, ``_3`` ..."""

    result: list[str] = []
    used: set[str] = set()
    for name in names:
        candidate = canonicalize_column_name(name)
        if candidate in used:
            suffix = 2
            while f"{candidate}_{suffix}" in used:
                suffix += 1
            candidate = f"{candidate}_{suffix}"
        used.add(candidate)
        result.append(candidate)
    return result


def canonicalize_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Return ``frame`` with every header canonicalised (data is not copied)."""

    return frame.set_axis(canonicalize_names(frame.columns), axis="columns")
