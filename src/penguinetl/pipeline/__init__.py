"""Record Normalizer and Collection Iterator."""

from penguinetl.pipeline.combine import check_normalized_columns, concat_normalized
from penguinetl.pipeline.iterator import (
    Normalizer,
    collect_sources,
    combine_sources,
    fold_fail_fast,
    fold_fault_tolerant,
    iter_outcomes,
    normalize_one,
    resolve_sources,
    run_batch,
)
from penguinetl.pipeline.normalizer import (
    FIELD_NORMALIZERS,
    RecordNormalizer,
    normalize_source,
    resolve_aliases,
)
from penguinetl.pipeline.results import (
    BatchReport,
    NormalizationFailure,
    NormalizationSuccess,
    SUMMARY_DTYPES,
    SourceOutcome,
)

__all__ = [
    "FIELD_NORMALIZERS",
    "BatchReport",
    "NormalizationFailure",
    "NormalizationSuccess",
    "Normalizer",
    "RecordNormalizer",
    "SUMMARY_DTYPES",
    "SourceOutcome",
    "check_normalized_columns",
    "collect_sources",
    "combine_sources",
    "concat_normalized",
    "fold_fail_fast",
    "fold_fault_tolerant",
    "iter_outcomes",
    "normalize_one",
    "normalize_source",
    "resolve_aliases",
    "resolve_sources",
    "run_batch",
]
