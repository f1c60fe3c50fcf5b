"""Date normalisation and calendar year extraction."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, date, datetime
from typing import Any

import pandas as pd

from penguinetl.core.logger import UnifiedLogger
from penguinetl.normalizers.base import BaseNormalizer
from penguinetl.normalizers.constants import DATE_FORMATS
from penguinetl.normalizers.helpers import is_na

logger = UnifiedLogger.get(__name__)


def _iter_parse_candidates(value: str) -> Iterator[datetime]:
    """Yield parsed datetime values using ISO-8601 first, then known formats."""

    try:
        yield datetime.fromisoformat(value)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            yield datetime.strptime(value, fmt)
        except ValueError:
            continue


def parse_date(value: Any) -> date | None:
    """Return ``value`` as a :class:`datetime.date` or ``None`` if it is not one."""

    if is_na(value):
        return None

    if isinstance(value, pd.Timestamp):
        if value.tzinfo is not None:
            value = value.tz_convert(UTC)
        return value.date()

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()

    if isinstance(value, date):
        return value

    text = str(value).strip()
    for candidate in _iter_parse_candidates(text):
        if candidate.tzinfo is not None:
            candidate = candidate.astimezone(UTC)
        return candidate.date()

    logger.debug("date_parse_failed", value=text)
    return None


class DateNormalizer(BaseNormalizer):
    """Normalise date-like values to ISO-8601 ``YYYY-MM-DD`` strings."""

    def normalize(self, value: Any, **_: Any) -> str | None:
        parsed = parse_date(value)
        return parsed.isoformat() if parsed is not None else None

    def validate(self, value: Any) -> bool:
        return is_na(value) or parse_date(value) is not None


class YearNormalizer(BaseNormalizer):
    """Extract the calendar year of a date-like value."""

    def normalize(self, value: Any, **_: Any) -> int | None:
        parsed = parse_date(value)
        return parsed.year if parsed is not None else None

    def validate(self, value: Any) -> bool:
        return is_na(value) or parse_date(value) is not None

    def normalize_series(self, series: pd.Series, **kwargs: Any) -> pd.Series:
        values = [self.safe_normalize(value, **kwargs) for value in series.tolist()]
        return pd.Series(values, index=series.index, dtype="Int64", name=series.name)
