from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from penguinetl.normalizers import (
    BaseNormalizer,
    FirstTokenNormalizer,
    LowerCaseNormalizer,
    NormalizerRegistry,
    NumericNormalizer,
    StringNormalizer,
    YearNormalizer,
    is_na,
    parse_date,
    registry,
)
from penguinetl.normalizers.date import DateNormalizer


@pytest.mark.parametrize(
    "value",
    [None, pd.NA, pd.NaT, float("nan"), np.nan, "", "   ", "NA", "n/a", "NULL"],
)
def test_is_na_detects_missing_markers(value: object) -> None:
    assert is_na(value)


@pytest.mark.parametrize("value", [0, 0.0, False, "0", "Dream", "."])
def test_is_na_keeps_present_values(value: object) -> None:
    assert not is_na(value)


def test_is_na_with_empty_marker_set_only_treats_blank_as_missing() -> None:
    assert not is_na("NA", na_strings=())
    assert is_na("  ", na_strings=())


class TestStringNormalizers:
    def test_string_normalizer_collapses_whitespace(self) -> None:
        assert StringNormalizer().normalize("  Biscoe \t  Island ") == "Biscoe Island"

    def test_string_normalizer_maps_blank_to_none(self) -> None:
        normalizer = StringNormalizer()

        assert normalizer.normalize("   ") is None
        assert normalizer.normalize(np.nan) is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("MALE", "male"), ("FEMALE", "female"), (" Male ", "male"), (".", ".")],
    )
    def test_lower_case_normalizer(self, raw: str, expected: str) -> None:
        assert LowerCaseNormalizer().normalize(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Pygoscelis adeliae", "Pygoscelis"),
            ("Adelie Penguin (Pygoscelis adeliae)", "Adelie"),
            ("  Gentoo   penguin ", "Gentoo"),
            ("Chinstrap", "Chinstrap"),
        ],
    )
    def test_first_token_normalizer(self, raw: str, expected: str) -> None:
        assert FirstTokenNormalizer().normalize(raw) == expected

    def test_first_token_normalizer_missing(self) -> None:
        assert FirstTokenNormalizer().normalize(None) is None

    def test_normalize_series_keeps_index_and_name(self) -> None:
        series = pd.Series(["MALE", None], index=[5, 7], name="sex")

        result = LowerCaseNormalizer().normalize_series(series)

        assert result.iloc[0] == "male"
        assert pd.isna(result.iloc[1])
        assert list(result.index) == [5, 7]
        assert result.name == "sex"
        assert result.dtype == "string"

    def test_normalize_series_of_empty_column_is_text(self) -> None:
        result = StringNormalizer().normalize_series(pd.Series([], dtype=object, name="island"))

        assert result.empty
        assert result.dtype == "string"


class TestNumericNormalizer:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("39.1", 39.1), (" 3750 ", 3750.0), (181, 181.0), ("-24.69454", -24.69454)],
    )
    def test_parses_numbers(self, raw: object, expected: float) -> None:
        assert NumericNormalizer().normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["NA", "", "abc", "inf", float("nan"), True, None])
    def test_unparseable_values_become_missing(self, raw: object) -> None:
        assert NumericNormalizer().normalize(raw) is None

    def test_normalize_series_is_float64(self) -> None:
        result = NumericNormalizer().normalize_series(pd.Series(["46.1", "oops", None]))

        assert result.dtype == "float64"
        assert result.iloc[0] == 46.1
        assert result.iloc[1:].isna().all()

    def test_validate(self) -> None:
        normalizer = NumericNormalizer()

        assert normalizer.validate("13.2")
        assert normalizer.validate(None)
        assert not normalizer.validate("thirteen")


class TestDates:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2008-11-15", date(2008, 11, 15)),
            ("2008/11/15", date(2008, 11, 15)),
            ("15/11/2008", date(2008, 11, 15)),
            ("15 Nov 2008", date(2008, 11, 15)),
            ("2008-11-15 10:30:00", date(2008, 11, 15)),
            (pd.Timestamp("2008-11-15"), date(2008, 11, 15)),
            (date(2008, 11, 15), date(2008, 11, 15)),
        ],
    )
    def test_parse_date(self, raw: object, expected: date) -> None:
        assert parse_date(raw) == expected

    def test_parse_date_converts_aware_values_to_utc(self) -> None:
        value = datetime(2008, 12, 31, 23, 0, tzinfo=timezone(timedelta(hours=-2)))

        assert parse_date(value) == date(2009, 1, 1)

    @pytest.mark.parametrize("raw", ["not a date", "2008-13-40", "", None, np.nan])
    def test_parse_date_rejects_non_dates(self, raw: object) -> None:
        assert parse_date(raw) is None

    def test_date_normalizer_returns_iso_strings(self) -> None:
        assert DateNormalizer().normalize("15/11/2008") == "2008-11-15"
        assert DateNormalizer().normalize("garbage") is None

    def test_year_normalizer(self) -> None:
        assert YearNormalizer().normalize("2008-11-15") == 2008

    def test_year_series_uses_nullable_integers(self) -> None:
        result = YearNormalizer().normalize_series(pd.Series(["2007-11-11", "garbage", None]))

        assert str(result.dtype) == "Int64"
        assert result.iloc[0] == 2007
        assert result.iloc[1:].isna().all()


class TestRegistry:
    def test_default_registry_contents(self) -> None:
        assert {"string", "lower", "first_token", "numeric", "date", "year"} <= set(registry)

    def test_normalize_by_name(self) -> None:
        assert registry.normalize("lower", "FEMALE") == "female"
        assert registry.normalize("year", "2009-11-18") == 2009

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="not found"):
            registry.get("missing")

    def test_register_validates_arguments(self) -> None:
        local = NormalizerRegistry()

        with pytest.raises(ValueError):
            local.register("", StringNormalizer())
        with pytest.raises(TypeError):
            local.register("bad", object())  # type: ignore[arg-type]

    def test_register_many_and_contains(self) -> None:
        local = NormalizerRegistry()
        local.register_many({"numeric": NumericNormalizer(), "string": StringNormalizer()})

        assert "numeric" in local
        assert "year" not in local
        assert list(local) == ["numeric", "string"]

    def test_safe_normalize_swallows_normalizer_errors(self) -> None:
        class Exploding(BaseNormalizer):
            def normalize(self, value: object, **_: object) -> object:
                raise RuntimeError("boom")

            def validate(self, value: object) -> bool:
                return False

        assert Exploding().safe_normalize("x") is None
