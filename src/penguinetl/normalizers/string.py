"""Text field normalisers (species, island, sex)."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable
from typing import Any

import pandas as pd

from penguinetl.normalizers.base import BaseNormalizer
from penguinetl.normalizers.helpers import is_na

_WHITESPACE_RUN = re.compile(r"\s+")


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text)


def _to_nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text)


class StringNormalizer(BaseNormalizer):
    """Trim, NFC-normalise and collapse runs of whitespace to one space.

    The normaliser itself treats only blank text as missing. Markers such as
    ``"NA"`` are turned into missing values earlier, when
    :func:`~penguinetl.io.sources.read_source` parses a CSV, so a literal
    ``"NA"`` survives only in frames handed to the pipeline directly.
    """

    def __init__(self) -> None:
        self.steps: list[Callable[[str], str]] = [str.strip, _to_nfc, _collapse_whitespace]

    def normalize_series(self, series: pd.Series, **kwargs: Any) -> pd.Series:
        return super().normalize_series(series, **kwargs).astype("string")

    def normalize(self, value: Any, **_: Any) -> str | None:
        if is_na(value, na_strings=()):
            return None
        text = str(value)
        for step in self.steps:
            text = step(text)
        return text or None

    def validate(self, value: Any) -> bool:
        return isinstance(value, str)


class LowerCaseNormalizer(StringNormalizer):
    """Lower-case free text, passing unknown vocabulary through untouched.

    Used for the ``sex`` field: ``"MALE"`` becomes ``"male"`` and a placeholder
    such as ``"."`` is kept as is.
    """

    def __init__(self) -> None:
        super().__init__()
        self.steps.append(str.lower)


class FirstTokenNormalizer(StringNormalizer):
    """Keep only the first whitespace-delimited token.

    ``"Adelie Penguin (Pygoscelis adeliae)"`` becomes ``"Adelie"``.
    """

    def normalize(self, value: Any, **kwargs: Any) -> str | None:
        text = super().normalize(value, **kwargs)
        return text.split(" ", 1)[0] if text is not None else None
