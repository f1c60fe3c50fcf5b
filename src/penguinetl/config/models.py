"""Pydantic models describing a batch normalisation run."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

__all__ = [
    "BatchPolicy",
    "DatePolicy",
    "LoggingConfig",
    "NormalizationConfig",
    "OutputConfig",
    "PipelineConfig",
    "SourcesConfig",
]


class BatchPolicy(str, Enum):
    """How the Collection Iterator folds per-source outcomes."""

    FAIL_FAST = "fail_fast"
    FAULT_TOLERANT = "fault_tolerant"


class DatePolicy(str, Enum):
    """What happens to an observation date that cannot be parsed."""

    COERCE = "coerce"
    STRICT = "strict"


class SourcesConfig(BaseModel):
    """Where the Raw Record Sources of a batch come from."""

    model_config = ConfigDict(extra="forbid")

    paths: list[Path] = Field(
        default_factory=list,
        description="Explicit, ordered list of source files.",
    )
    directory: Path | None = Field(
        default=None,
        description="Directory scanned for sources when no explicit paths are given.",
    )
    pattern: str = Field(default="*.csv", description="Glob pattern used for directory discovery.")

    @model_validator(mode="after")
    def _validate_exclusive(self) -> "SourcesConfig":
        if self.paths and self.directory is not None:
            msg = "sources.paths and sources.directory are mutually exclusive"
            raise ValueError(msg)
        if not self.pattern.strip():
            raise ValueError("sources.pattern must not be empty")
        return self


class NormalizationConfig(BaseModel):
    """Record Normalizer settings."""

    model_config = ConfigDict(extra="forbid")

    date_policy: DatePolicy = Field(
        default=DatePolicy.COERCE,
        description="'coerce' turns unparseable dates into a missing year; 'strict' fails the source.",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of source files.")


class OutputConfig(BaseModel):
    """Destination of the combined dataset."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = Field(default=None, description="CSV file written after a batch run.")
    na_rep: str = Field(default="", description="Representation of missing values in CSV output.")


class LoggingConfig(BaseModel):
    """Structured logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Log level for UnifiedLogger.")
    format: str = Field(default="json", description="Log format (json, key_value).")

    @model_validator(mode="after")
    def _validate_format(self) -> "LoggingConfig":
        if self.format not in {"json", "key_value"}:
            raise ValueError(f"logging.format must be 'json' or 'key_value', got {self.format!r}")
        return self


class PipelineConfig(BaseModel):
    """Top-level configuration of a batch run."""

    model_config = ConfigDict(extra="forbid")

    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    policy: BatchPolicy = Field(default=BatchPolicy.FAIL_FAST)
    workers: PositiveInt = Field(
        default=1,
        description="Thread count for the fault-tolerant policy; fail-fast is always sequential.",
    )
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
