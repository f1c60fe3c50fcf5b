"""Pandera schemas describing pipeline outputs."""

from penguinetl.schemas.penguins import (
    CANONICAL_COLUMNS,
    CANONICAL_DTYPES,
    DATE_FIELD,
    SOURCE_ALIASES,
    NormalizedPenguinSchema,
    empty_normalized_frame,
)

__all__ = [
    "CANONICAL_COLUMNS",
    "CANONICAL_DTYPES",
    "DATE_FIELD",
    "SOURCE_ALIASES",
    "NormalizedPenguinSchema",
    "empty_normalized_frame",
]
