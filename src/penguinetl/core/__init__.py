"""Core runtime helpers shared by every pipeline stage."""

from penguinetl.core.errors import (
    ConfigError,
    MalformedDate,
    NormalizationError,
    PenguinETLError,
    SchemaMismatch,
    SourceUnavailable,
)
from penguinetl.core.frame import ensure_columns, tap
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import LogConfig, LogFormat, UnifiedLogger

__all__ = [
    "ConfigError",
    "LogConfig",
    "LogEvents",
    "LogFormat",
    "MalformedDate",
    "NormalizationError",
    "PenguinETLError",
    "SchemaMismatch",
    "SourceUnavailable",
    "UnifiedLogger",
    "ensure_columns",
    "tap",
]
