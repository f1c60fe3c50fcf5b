"""Pipeline configuration models and loader."""

from __future__ import annotations

from .loader import ENV_PREFIX, load_config, load_raw_config, parse_set_overrides
from .models import (
    BatchPolicy,
    DatePolicy,
    LoggingConfig,
    NormalizationConfig,
    OutputConfig,
    PipelineConfig,
    SourcesConfig,
)

__all__ = [
    "ENV_PREFIX",
    "BatchPolicy",
    "DatePolicy",
    "LoggingConfig",
    "NormalizationConfig",
    "OutputConfig",
    "PipelineConfig",
    "SourcesConfig",
    "load_config",
    "load_raw_config",
    "parse_set_overrides",
]
