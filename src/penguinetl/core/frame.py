from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import pandas as pd
from pandas import Series

T = TypeVar("T")


def ensure_columns(df: pd.DataFrame, columns: Iterable[tuple[str, str]]) -> pd.DataFrame:
    """Return a copy of ``df`` with every ``(name, dtype)`` column present.

    Missing columns are appended, filled with the missing marker of the
    requested dtype (``NaN`` or ``pd.NA``). Existing columns are left untouched.
    """
    out = df.copy()

    for name, dtype in columns:
        if name not in out.columns:
            out[name] = Series(index=out.index, dtype=dtype)

    return out


def tap(value: T, fn: Callable[[T], Any]) -> T:
    """Call ``fn(value)`` for its side effect and return ``value`` unchanged."""
    fn(value)
    return value
