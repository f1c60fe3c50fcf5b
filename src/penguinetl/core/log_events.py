"""Registry of structured logging event identifiers."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["LogEvents"]


class LogEvents(str, Enum):
    """Strongly typed registry of event names.

    Member names follow ``<namespace>_<action>_<outcome>`` and map to dotted
    identifiers, e.g. ``SOURCE_READ_START`` -> ``"source.read.start"``.
    """

    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, last_values: list[str]) -> str:
        parts = name.lower().split("_")
        namespace = parts[0]
        outcome = parts[-1] if len(parts) > 1 else "event"
        action = "_".join(parts[1:-1]) or "event"
        return f"{namespace}.{action}.{outcome}"

    def __str__(self) -> str:
        return str(self.value)

    CLI_RUN_START = auto()
    CLI_RUN_FINISH = auto()
    CLI_RUN_ERROR = auto()
    CONFIG_LOAD_FINISH = auto()
    SOURCE_READ_START = auto()
    SOURCE_READ_ERROR = auto()
    SOURCE_DISCOVER_FINISH = auto()
    NORMALIZE_SOURCE_START = auto()
    NORMALIZE_SOURCE_FINISH = auto()
    NORMALIZE_DATE_COERCED = auto()
    NORMALIZE_COLUMNS_RENAMED = auto()
    BATCH_RUN_START = auto()
    BATCH_RUN_FINISH = auto()
    BATCH_RUN_ABORTED = auto()
    BATCH_SOURCE_FAILED = auto()
    BATCH_SOURCE_SUCCEEDED = auto()
    WRITE_DATASET_FINISH = auto()
    WRITE_GROUP_FINISH = auto()
