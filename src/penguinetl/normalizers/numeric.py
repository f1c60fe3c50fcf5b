"""Numeric normalizers."""

from __future__ import annotations

import math
from typing import Any

import pandas as pd

from penguinetl.normalizers.base import BaseNormalizer
from penguinetl.normalizers.helpers import is_na


class NumericNormalizer(BaseNormalizer):
    """Coerce measurements to ``float``; anything unparseable becomes missing."""

    def normalize(self, value: Any, **_: Any) -> float | None:
        return self.normalize_float(value)

    def validate(self, value: Any) -> bool:
        if is_na(value):
            return True
        return self.normalize_float(value) is not None

    def normalize_float(self, value: Any) -> float | None:
        if is_na(value) or isinstance(value, bool):
            return None
        try:
            result = float(str(value).strip())
        except (TypeError, ValueError):
            return None
        if math.isnan(result) or math.isinf(result):
            return None
        return result

    def normalize_series(self, series: pd.Series, **kwargs: Any) -> pd.Series:
        return super().normalize_series(series, **kwargs).astype("float64")
