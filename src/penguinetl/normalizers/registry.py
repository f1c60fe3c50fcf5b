"""Name -> value normaliser lookup used by the Record Normalizer."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import pandas as pd

from penguinetl.normalizers.base import BaseNormalizer


class NormalizerRegistry:
    """Named value normalisers, iterated in registration order.

    Field mappings refer to normalisers by name (``"numeric"``, ``"year"``) so
    a caller can swap one implementation without touching the mapping.
    """

    def __init__(self) -> None:
        self._normalizers: dict[str, BaseNormalizer] = {}

    def register(self, name: str, normalizer: BaseNormalizer) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("a normaliser needs a non-empty name")
        if not isinstance(normalizer, BaseNormalizer):
            raise TypeError(f"{type(normalizer).__name__} is not a BaseNormalizer")
        self._normalizers[name] = normalizer

    def register_many(self, normalizers: Mapping[str, BaseNormalizer]) -> None:
        for name in normalizers:
            self.register(name, normalizers[name])

    def get(self, name: str) -> BaseNormalizer:
        if name not in self._normalizers:
            known = ", ".join(self._normalizers) or "none"
            raise ValueError(f"normaliser {name!r} not found (registered: {known})")
        return self._normalizers[name]

    def normalize(self, name: str, value: Any, **kwargs: Any) -> Any:
        """Normalise one ``value``; failures inside the normaliser yield ``None``."""

        return self.get(name).safe_normalize(value, **kwargs)

    def normalize_series(self, name: str, series: pd.Series, **kwargs: Any) -> pd.Series:
        return self.get(name).normalize_series(series, **kwargs)

    def __contains__(self, name: object) -> bool:
        return name in self._normalizers

    def __iter__(self) -> Iterator[str]:
        return iter(self._normalizers)


registry = NormalizerRegistry()
