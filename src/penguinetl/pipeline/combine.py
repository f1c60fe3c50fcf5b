"""Row-wise union of Normalized Record sets."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from penguinetl.core.errors import SchemaMismatch
from penguinetl.schemas.penguins import CANONICAL_COLUMNS, empty_normalized_frame

__all__ = ["check_normalized_columns", "concat_normalized"]


def check_normalized_columns(frame: pd.DataFrame, *, source: str) -> None:
    """Raise :class:`SchemaMismatch` unless ``frame`` has exactly the canonical columns."""

    actual = [str(column) for column in frame.columns]
    if actual == list(CANONICAL_COLUMNS):
        return
    missing = [column for column in CANONICAL_COLUMNS if column not in actual]
    unexpected = [column for column in actual if column not in CANONICAL_COLUMNS]
    if missing or unexpected:
        raise SchemaMismatch(source, missing=missing, unexpected=unexpected)
    raise SchemaMismatch(source, f"columns out of canonical order: {', '.join(actual)}")


def concat_normalized(parts: Iterable[tuple[str, pd.DataFrame]]) -> pd.DataFrame:
    """Concatenate labelled normalised frames in the given order.

    Every part must carry the canonical columns in canonical order; the
    offending label is reported otherwise. Rows are neither deduplicated nor
    reordered and the result has a fresh ``RangeIndex``.
    """

    frames: list[pd.DataFrame] = []
    for label, frame in parts:
        check_normalized_columns(frame, source=label)
        if not frame.empty:
            frames.append(frame)

    if not frames:
        return empty_normalized_frame()
    return pd.concat(frames, ignore_index=True)
