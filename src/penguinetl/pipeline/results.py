"""Tagged per-source outcomes and the fault-tolerant batch report."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias

import pandas as pd

from penguinetl.core.errors import NormalizationError
from penguinetl.io.sources import Source

from .combine import concat_normalized

__all__ = [
    "BatchReport",
    "NormalizationFailure",
    "NormalizationSuccess",
    "SUMMARY_DTYPES",
    "SourceOutcome",
]

SUMMARY_DTYPES: Mapping[str, str] = {
    "source": "string",
    "status": "string",
    "rows": "int64",
    "error_code": "string",
    "error": "string",
}
"""Columns of :meth:`BatchReport.summary`; failure details are missing for successes."""


@dataclass(frozen=True, slots=True, eq=False)
class NormalizationSuccess:
    """A source that produced a Normalized Record set."""

    ok: ClassVar[bool] = True

    source: Source
    label: str
    frame: pd.DataFrame

    @property
    def rows(self) -> int:
        return int(self.frame.shape[0])


@dataclass(frozen=True, slots=True, eq=False)
class NormalizationFailure:
    """A source whose normalisation failed; no partial rows are kept."""

    ok: ClassVar[bool] = False

    source: Source
    label: str
    error: NormalizationError

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.reason


SourceOutcome: TypeAlias = NormalizationSuccess | NormalizationFailure


class BatchReport(Mapping[str, SourceOutcome]):
    """Per-source outcomes of a fault-tolerant run, keyed by source label.

    Iteration follows input order. Exactly one entry exists per input source;
    building a report from two outcomes with the same label is an error.
    """

    def __init__(self, outcomes: Iterable[SourceOutcome]) -> None:
        self._outcomes: dict[str, SourceOutcome] = {}
        for outcome in outcomes:
            if outcome.label in self._outcomes:
                raise ValueError(f"duplicate source in batch: {outcome.label}")
            self._outcomes[outcome.label] = outcome

    def __getitem__(self, label: str) -> SourceOutcome:
        return self._outcomes[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        return f"BatchReport(succeeded={len(self.succeeded)}, failed={len(self.failed)})"

    @property
    def succeeded(self) -> list[NormalizationSuccess]:
        return [o for o in self._outcomes.values() if isinstance(o, NormalizationSuccess)]

    @property
    def failed(self) -> list[NormalizationFailure]:
        return [o for o in self._outcomes.values() if isinstance(o, NormalizationFailure)]

    @property
    def ok(self) -> bool:
        """``True`` when every source succeeded."""

        return not self.failed

    def combined(self) -> pd.DataFrame:
        """Concatenate the successful Normalized Record sets in input order."""

        return concat_normalized((o.label, o.frame) for o in self.succeeded)

    def summary(self) -> pd.DataFrame:
        """One row per source: label, status, row count and failure details."""

        records: list[dict[str, Any]] = []
        for label, outcome in self._outcomes.items():
            if isinstance(outcome, NormalizationSuccess):
                records.append(
                    {"source": label, "status": "ok", "rows": outcome.rows, "error_code": None, "error": None}
                )
            else:
                records.append(
                    {
                        "source": label,
                        "status": "failed",
                        "rows": 0,
                        "error_code": outcome.code,
                        "error": outcome.message,
                    }
                )
        frame = pd.DataFrame.from_records(records, columns=list(SUMMARY_DTYPES))
        return frame.astype(dict(SUMMARY_DTYPES))
