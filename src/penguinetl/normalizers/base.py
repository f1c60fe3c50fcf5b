"""Base normalizer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

from penguinetl.core.logger import UnifiedLogger

logger = UnifiedLogger.get(__name__)


class BaseNormalizer(ABC):
    """Common contract for scalar value normalisers.

    Subclasses implement :meth:`normalize` for a single value. Column-wide
    application goes through :meth:`normalize_series`, which subclasses may
    override to pin the resulting dtype.
    """

    @abstractmethod
    def normalize(self, value: Any, **kwargs: Any) -> Any:
        """Return the normalised form of ``value`` or ``None`` when missing."""

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Return ``True`` when ``value`` can be normalised."""

    def safe_normalize(self, value: Any, **kwargs: Any) -> Any:
        try:
            return self.normalize(value, **kwargs)
        except Exception as exc:
            logger.warning("normalization_failed", error=str(exc), value=repr(value))
            return None

    def normalize_series(self, series: pd.Series, **kwargs: Any) -> pd.Series:
        """Apply :meth:`safe_normalize` element-wise, keeping the index."""

        values = [self.safe_normalize(value, **kwargs) for value in series.tolist()]
        return pd.Series(values, index=series.index, dtype=object, name=series.name)
