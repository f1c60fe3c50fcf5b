"""Input discovery/reading and deterministic output writers."""

from penguinetl.io.output import resolve_column, split_by_group, write_frame_atomic
from penguinetl.io.sources import (
    DEFAULT_PATTERN,
    Source,
    discover_sources,
    read_source,
    source_label,
)

__all__ = [
    "DEFAULT_PATTERN",
    "Source",
    "discover_sources",
    "read_source",
    "resolve_column",
    "source_label",
    "split_by_group",
    "write_frame_atomic",
]
