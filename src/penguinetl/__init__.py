"""Public interface for the penguin record normalisation pipeline."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "BatchPolicy",
    "BatchReport",
    "PipelineConfig",
    "RecordNormalizer",
    "discover_sources",
    "load_config",
    "normalize_source",
    "run_batch",
]

_LAZY_EXPORTS: dict[str, str] = {
    "BatchPolicy": "penguinetl.config",
    "PipelineConfig": "penguinetl.config",
    "load_config": "penguinetl.config",
    "BatchReport": "penguinetl.pipeline",
    "RecordNormalizer": "penguinetl.pipeline",
    "normalize_source": "penguinetl.pipeline",
    "run_batch": "penguinetl.pipeline",
    "discover_sources": "penguinetl.io",
}


def __getattr__(name: str) -> Any:
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is not None:
        return getattr(import_module(module_name), name)
    msg = f"module 'penguinetl' has no attribute '{name}'"
    raise AttributeError(msg)
