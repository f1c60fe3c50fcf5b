"""Collection Iterator: apply the Record Normalizer across many sources.

Normalisation of each source is turned into a tagged outcome by
:func:`iter_outcomes`. The two batch policies are folds over that sequence:

* :func:`fold_fail_fast` stops at the first failure and raises it, discarding
  every frame gathered so far;
* :func:`fold_fault_tolerant` consumes every outcome into a
  :class:`~penguinetl.pipeline.results.BatchReport`.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd

from penguinetl.config.models import BatchPolicy, PipelineConfig, SourcesConfig
from penguinetl.core.errors import ConfigError, NormalizationError
from penguinetl.core.frame import tap
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import UnifiedLogger
from penguinetl.io.sources import Source, discover_sources, source_label

from .combine import concat_normalized
from .normalizer import RecordNormalizer
from .results import BatchReport, NormalizationFailure, NormalizationSuccess, SourceOutcome

__all__ = [
    "Normalizer",
    "collect_sources",
    "combine_sources",
    "fold_fail_fast",
    "fold_fault_tolerant",
    "iter_outcomes",
    "normalize_one",
    "resolve_sources",
    "run_batch",
]

Normalizer = Callable[[Source], pd.DataFrame]

logger = UnifiedLogger.get(__name__)


def normalize_one(source: Source, normalizer: Normalizer) -> SourceOutcome:
    """Run ``normalizer`` on ``source`` and tag the result.

    Domain errors are captured as they are. Any other exception is wrapped in a
    :class:`NormalizationError` naming the source, with the original chained as
    ``__cause__``.
    """

    label = source_label(source)
    try:
        frame = normalizer(source)
    except NormalizationError as exc:
        error = exc
    except Exception as exc:
        logger.error(LogEvents.BATCH_SOURCE_FAILED, source=label, error=str(exc), exc_info=True)
        error = NormalizationError(label, f"{type(exc).__name__}: {exc}")
        error.__cause__ = exc
    else:
        return NormalizationSuccess(source=source, label=label, frame=frame)

    logger.warning(LogEvents.BATCH_SOURCE_FAILED, source=label, code=error.code, error=error.reason)
    return NormalizationFailure(source=source, label=label, error=error)


def _ensure_unique(sources: Sequence[Source]) -> None:
    seen: set[str] = set()
    for source in sources:
        label = source_label(source)
        if label in seen:
            raise ValueError(f"duplicate source in batch: {label}")
        seen.add(label)


def iter_outcomes(
    sources: Iterable[Source],
    normalizer: Normalizer | None = None,
) -> Iterator[SourceOutcome]:
    """Lazily yield one outcome per source, in input order."""

    materialized = list(sources)
    _ensure_unique(materialized)
    active = normalizer or RecordNormalizer()
    for source in materialized:
        yield tap(normalize_one(source, active), _log_outcome)


def _log_outcome(outcome: SourceOutcome) -> None:
    if isinstance(outcome, NormalizationSuccess):
        logger.info(LogEvents.BATCH_SOURCE_SUCCEEDED, source=outcome.label, rows=outcome.rows)


def fold_fail_fast(outcomes: Iterable[SourceOutcome]) -> pd.DataFrame:
    """Concatenate successes; raise the first failure's error immediately."""

    parts: list[tuple[str, pd.DataFrame]] = []
    for outcome in outcomes:
        if isinstance(outcome, NormalizationFailure):
            logger.error(
                LogEvents.BATCH_RUN_ABORTED,
                source=outcome.label,
                code=outcome.code,
                discarded_sources=len(parts),
            )
            raise outcome.error
        parts.append((outcome.label, outcome.frame))
    return concat_normalized(parts)


def fold_fault_tolerant(outcomes: Iterable[SourceOutcome]) -> BatchReport:
    """Collect every outcome into a :class:`BatchReport`."""

    return BatchReport(outcomes)


def combine_sources(
    sources: Iterable[Source],
    normalizer: Normalizer | None = None,
) -> pd.DataFrame:
    """Fail-fast batch: one Combined Record Set or the first failure."""

    return fold_fail_fast(iter_outcomes(sources, normalizer))


def collect_sources(
    sources: Iterable[Source],
    normalizer: Normalizer | None = None,
    *,
    workers: int = 1,
) -> BatchReport:
    """Fault-tolerant batch: a report with exactly one entry per source.

    With ``workers > 1`` sources are normalised on a thread pool; the report
    still follows input order.
    """

    if workers < 1:
        raise ValueError("workers must be a positive integer")
    if workers == 1:
        return fold_fault_tolerant(iter_outcomes(sources, normalizer))

    materialized = list(sources)
    _ensure_unique(materialized)
    active = normalizer or RecordNormalizer()
    context = contextvars.copy_context()

    def _task(source: Source) -> SourceOutcome:
        return context.copy().run(normalize_one, source, active)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        outcomes = list(executor.map(_task, materialized))
    for outcome in outcomes:
        _log_outcome(outcome)
    return fold_fault_tolerant(outcomes)


def resolve_sources(config: SourcesConfig) -> list[Path]:
    """Return the explicit source list or the result of a directory scan."""

    if config.paths:
        return list(config.paths)
    if config.directory is not None:
        return discover_sources(config.directory, config.pattern)
    raise ConfigError("no sources configured: set sources.paths or sources.directory")


def run_batch(
    config: PipelineConfig,
    *,
    normalizer: Normalizer | None = None,
) -> pd.DataFrame | BatchReport:
    """Run the configured policy over the configured sources.

    Returns the Combined Record Set for :attr:`BatchPolicy.FAIL_FAST` and a
    :class:`BatchReport` for :attr:`BatchPolicy.FAULT_TOLERANT`.
    """

    sources = resolve_sources(config.sources)
    active = normalizer or RecordNormalizer(
        date_policy=config.normalization.date_policy,
        encoding=config.normalization.encoding,
    )
    with UnifiedLogger.stage("batch", policy=config.policy.value):
        logger.info(LogEvents.BATCH_RUN_START, sources=len(sources))
        result: pd.DataFrame | BatchReport
        if config.policy is BatchPolicy.FAIL_FAST:
            result = combine_sources(sources, active)
            logger.info(LogEvents.BATCH_RUN_FINISH, rows=int(result.shape[0]), failed=0)
        else:
            result = collect_sources(sources, active, workers=config.workers)
            logger.info(
                LogEvents.BATCH_RUN_FINISH,
                rows=sum(outcome.rows for outcome in result.succeeded),
                failed=len(result.failed),
            )
        return result
