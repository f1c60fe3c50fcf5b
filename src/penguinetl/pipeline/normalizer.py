"""Record Normalizer: one raw penguin table in, one Normalized Record set out."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Final

import pandas as pd
from pandera.errors import SchemaError, SchemaErrors

from penguinetl.config.models import DatePolicy
from penguinetl.core.errors import MalformedDate, SchemaMismatch
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import UnifiedLogger
from penguinetl.io.sources import Source, read_source, source_label
from penguinetl.normalizers import NormalizerRegistry, canonicalize_columns, is_na, registry
from penguinetl.schemas.penguins import (
    DATE_FIELD,
    SOURCE_ALIASES,
    NormalizedPenguinSchema,
)

__all__ = ["FIELD_NORMALIZERS", "RecordNormalizer", "normalize_source", "resolve_aliases"]

logger = UnifiedLogger.get(__name__)

FIELD_NORMALIZERS: Final[Mapping[str, tuple[str, str]]] = {
    "species": ("species", "first_token"),
    "island": ("island", "string"),
    "bill_length_mm": ("bill_length_mm", "numeric"),
    "bill_depth_mm": ("bill_depth_mm", "numeric"),
    "flipper_length_mm": ("flipper_length_mm", "numeric"),
    "body_mass_g": ("body_mass_g", "numeric"),
    "sex": ("sex", "lower"),
    "year": (DATE_FIELD, "year"),
}
"""Output field -> (input field in :data:`SOURCE_ALIASES`, registered normaliser)."""


def resolve_aliases(columns: Iterable[object], *, source: str) -> dict[str, str]:
    """Map every input field to the canonical header carrying it in ``columns``.

    Raises :class:`SchemaMismatch` naming every field absent under all of its
    recognised aliases.
    """

    available = {str(column) for column in columns}
    resolved: dict[str, str] = {}
    missing: list[str] = []
    for field, aliases in SOURCE_ALIASES.items():
        match = next((alias for alias in aliases if alias in available), None)
        if match is None:
            missing.append(field)
        else:
            resolved[field] = match
    if missing:
        raise SchemaMismatch(source, missing=missing)
    return resolved


class RecordNormalizer:
    """Turn a Raw Record Source into the canonical eight-column frame.

    Instances are callables so they can be handed to the Collection Iterator
    as "the normaliser".
    """

    def __init__(
        self,
        *,
        date_policy: DatePolicy | str = DatePolicy.COERCE,
        encoding: str = "utf-8",
        normalizers: NormalizerRegistry | None = None,
    ) -> None:
        self.date_policy = DatePolicy(date_policy)
        self.encoding = encoding
        self.normalizers = normalizers or registry

    def __call__(self, source: Source) -> pd.DataFrame:
        return self.normalize(source)

    def normalize(self, source: Source) -> pd.DataFrame:
        label = source_label(source)
        with UnifiedLogger.stage("normalize", source=label):
            logger.debug(LogEvents.NORMALIZE_SOURCE_START)
            raw = read_source(source, encoding=self.encoding)
            result = self.normalize_frame(raw, source=label)
            logger.info(LogEvents.NORMALIZE_SOURCE_FINISH, rows=int(result.shape[0]))
            return result

    def normalize_frame(self, raw: pd.DataFrame, *, source: str = "<frame>") -> pd.DataFrame:
        """Normalise an already loaded raw table; ``source`` labels errors."""

        frame = canonicalize_columns(raw).reset_index(drop=True)
        columns = resolve_aliases(frame.columns, source=source)
        logger.debug(LogEvents.NORMALIZE_COLUMNS_RENAMED, columns=columns)

        normalized = pd.DataFrame(
            {
                field: self.normalizers.normalize_series(name, frame[columns[input_field]])
                for field, (input_field, name) in FIELD_NORMALIZERS.items()
            }
        )
        self._check_dates(frame[columns[DATE_FIELD]], normalized["year"], source=source)
        return self._validate(normalized, source=source)

    def _check_dates(self, raw_dates: pd.Series, years: pd.Series, *, source: str) -> None:
        present = raw_dates.map(lambda value: not is_na(value)).to_numpy(dtype=bool)
        unparsed = present & years.isna().to_numpy(dtype=bool)
        if not unparsed.any():
            return
        bad_values = [str(value) for value in pd.unique(raw_dates[unparsed])]
        if self.date_policy is DatePolicy.STRICT:
            raise MalformedDate(source, bad_values)
        logger.warning(
            LogEvents.NORMALIZE_DATE_COERCED,
            count=int(unparsed.sum()),
            values=bad_values[:5],
        )

    def _validate(self, frame: pd.DataFrame, *, source: str) -> pd.DataFrame:
        try:
            return NormalizedPenguinSchema.validate(frame)
        except (SchemaError, SchemaErrors) as exc:
            raise SchemaMismatch(source, f"normalised output failed validation: {exc}") from exc


def normalize_source(
    source: Source,
    *,
    date_policy: DatePolicy | str = DatePolicy.COERCE,
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """Normalise a single source with a default :class:`RecordNormalizer`."""

    return RecordNormalizer(date_policy=date_policy, encoding=encoding)(source)

