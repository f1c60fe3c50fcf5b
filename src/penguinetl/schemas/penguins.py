"""Pandera schema and column contract for normalised penguin records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

from penguinetl.core.frame import ensure_columns

__all__ = [
    "CANONICAL_COLUMNS",
    "CANONICAL_DTYPES",
    "DATE_FIELD",
    "SOURCE_ALIASES",
    "NormalizedPenguinSchema",
    "empty_normalized_frame",
]

CANONICAL_COLUMNS: Final[tuple[str, ...]] = (
    "species",
    "island",
    "bill_length_mm",
    "bill_depth_mm",
    "flipper_length_mm",
    "body_mass_g",
    "sex",
    "year",
)
"""Fields of a Normalized Record, in output order."""

CANONICAL_DTYPES: Final[Mapping[str, str]] = {
    "species": "string",
    "island": "string",
    "bill_length_mm": "float64",
    "bill_depth_mm": "float64",
    "flipper_length_mm": "float64",
    "body_mass_g": "float64",
    "sex": "string",
    "year": "Int64",
}

DATE_FIELD: Final[str] = "date"
"""Logical name of the date-of-observation input the ``year`` is derived from."""

SOURCE_ALIASES: Final[Mapping[str, tuple[str, ...]]] = {
    "species": ("species",),
    "island": ("island",),
    DATE_FIELD: ("date_egg", "date", "date_of_observation", "observation_date"),
    "bill_length_mm": ("culmen_length_mm", "bill_length_mm"),
    "bill_depth_mm": ("culmen_depth_mm", "bill_depth_mm"),
    "flipper_length_mm": ("flipper_length_mm",),
    "body_mass_g": ("body_mass_g",),
    "sex": ("sex",),
}
"""Canonicalised source header spellings accepted for each input field.

Keys are output fields (plus :data:`DATE_FIELD`); the first alias present in a
source wins.
"""


class NormalizedPenguinSchema(pa.DataFrameModel):
    """Validate the fixed eight-column Normalized Record layout."""

    species: Series[pd.StringDtype] = pa.Field(nullable=True, description="Genus token of the species field")
    island: Series[pd.StringDtype] = pa.Field(nullable=True)
    bill_length_mm: Series[float] = pa.Field(nullable=True)
    bill_depth_mm: Series[float] = pa.Field(nullable=True)
    flipper_length_mm: Series[float] = pa.Field(nullable=True)
    body_mass_g: Series[float] = pa.Field(nullable=True)
    sex: Series[pd.StringDtype] = pa.Field(nullable=True, description="Lower-cased sex indicator")
    year: Series[pd.Int64Dtype] = pa.Field(nullable=True, description="Year of observation")

    class Config:
        strict = True
        ordered = True
        coerce = False


def empty_normalized_frame() -> pd.DataFrame:
    """Return a zero-row frame carrying the canonical columns and dtypes."""

    return ensure_columns(pd.DataFrame(index=pd.RangeIndex(0)), CANONICAL_DTYPES.items())
