from __future__ import annotations

import pandas as pd
import pytest

from penguinetl.core import (
    ConfigError,
    MalformedDate,
    NormalizationError,
    PenguinETLError,
    SchemaMismatch,
    SourceUnavailable,
    ensure_columns,
    tap,
)
from penguinetl.schemas import CANONICAL_COLUMNS, CANONICAL_DTYPES, empty_normalized_frame


def test_ensure_columns_adds_typed_missing_columns() -> None:
    frame = pd.DataFrame({"island": ["Dream", "Biscoe"]})

    result = ensure_columns(frame, [("island", "object"), ("body_mass_g", "float64"), ("year", "Int64")])

    assert list(result.columns) == ["island", "body_mass_g", "year"]
    assert result["body_mass_g"].dtype == "float64"
    assert str(result["year"].dtype) == "Int64"
    assert result[["body_mass_g", "year"]].isna().all().all()
    assert list(frame.columns) == ["island"]


def test_empty_normalized_frame_has_canonical_layout() -> None:
    frame = empty_normalized_frame()

    assert tuple(frame.columns) == CANONICAL_COLUMNS
    assert frame.dtypes.astype(str).to_dict() == dict(CANONICAL_DTYPES)
    assert len(frame) == 0


def test_tap_returns_its_input() -> None:
    seen: list[int] = []

    assert tap(41, seen.append) == 41
    assert seen == [41]


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NormalizationError("a.csv", "boom"), "normalization_error"),
        (SourceUnavailable("a.csv", "file does not exist"), "source_unavailable"),
        (SchemaMismatch("a.csv", missing=["sex"]), "schema_mismatch"),
        (MalformedDate("a.csv", ["soon"]), "malformed_date"),
    ],
)
def test_normalization_error_family(error: NormalizationError, code: str) -> None:
    assert isinstance(error, PenguinETLError)
    assert error.code == code
    assert error.source == "a.csv"
    assert str(error) == f"a.csv: {error.reason}"


def test_config_error_is_not_a_normalization_error() -> None:
    assert issubclass(ConfigError, PenguinETLError)
    assert not issubclass(ConfigError, NormalizationError)


def test_schema_mismatch_explicit_reason() -> None:
    error = SchemaMismatch("a.csv", "columns out of canonical order: year, sex")

    assert error.reason == "columns out of canonical order: year, sex"
    assert error.missing == ()
