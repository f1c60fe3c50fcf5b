"""Shared helper utilities for normalizers."""

from __future__ import annotations

import math
from collections.abc import Collection
from typing import Any

import pandas as pd

from penguinetl.normalizers.constants import NA_STRINGS


def is_na(value: Any, *, na_strings: Collection[str] = NA_STRINGS) -> bool:
    """Return ``True`` when *value* should be treated as a missing entry.

    * ``None``, ``pd.NA`` and ``pd.NaT`` are missing.
    * ``float`` values equal to ``NaN`` are missing.
    * Strings are stripped; empty strings and case-insensitive members of
      ``na_strings`` are missing. Pass an empty collection to only treat blank
      strings as missing.

    Everything else, including integers and booleans, is present.
    """

    if value is None or value is pd.NA or value is pd.NaT:
        return True

    if isinstance(value, float) and math.isnan(value):
        return True

    if isinstance(value, str):
        stripped = value.strip()
        if stripped == "":
            return True
        return stripped.lower() in na_strings

    return False


__all__ = ["is_na"]
