"""Domain-specific exceptions for the penguin normalisation pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

__all__ = [
    "PenguinETLError",
    "ConfigError",
    "NormalizationError",
    "SourceUnavailable",
    "SchemaMismatch",
    "MalformedDate",
]


class PenguinETLError(Exception):
    """Base class for penguinetl domain errors."""

    pass


class ConfigError(PenguinETLError):
    """Raised when a pipeline configuration cannot be loaded or validated."""


class NormalizationError(PenguinETLError):
    """Failure of the Record Normalizer for a single source.

    ``source`` is the human readable label of the offending source and
    ``reason`` the description without the source prefix, so batch reports can
    render both independently.
    """

    code: ClassVar[str] = "normalization_error"

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class SourceUnavailable(NormalizationError):
    """The raw resource could not be opened or parsed as a table."""

    code: ClassVar[str] = "source_unavailable"


class SchemaMismatch(NormalizationError):
    """A source (or a normalised frame) does not carry the expected columns."""

    code: ClassVar[str] = "schema_mismatch"

    def __init__(
        self,
        source: str,
        reason: str | None = None,
        *,
        missing: Sequence[str] = (),
        unexpected: Sequence[str] = (),
    ) -> None:
        self.missing = tuple(missing)
        self.unexpected = tuple(unexpected)
        if reason is None:
            parts: list[str] = []
            if self.missing:
                parts.append(f"missing columns: {', '.join(self.missing)}")
            if self.unexpected:
                parts.append(f"unexpected columns: {', '.join(self.unexpected)}")
            reason = "; ".join(parts) or "column layout does not match"
        super().__init__(source, reason)


class MalformedDate(NormalizationError):
    """The date-of-observation column holds values that are not dates."""

    code: ClassVar[str] = "malformed_date"

    def __init__(self, source: str, values: Sequence[str]) -> None:
        self.values = tuple(values)
        preview = ", ".join(repr(value) for value in self.values[:5])
        if len(self.values) > 5:
            preview += f", ... ({len(self.values)} total)"
        super().__init__(source, f"unparseable observation dates: {preview}")

