"""Structured logging for penguinetl.

All entry points (CLI commands, batch runs, tests) call :func:`configure_logging`
once so that every event passes the same structlog processor chain and ends
up as one JSON (or key/value) line on stderr. Per-run and per-source context
such as ``run_id``, ``stage`` or ``source`` lives in :mod:`structlog.contextvars`
and is merged into each event while bound.
"""
from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping, Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, cast

import structlog
from structlog.contextvars import bind_contextvars, bound_contextvars, clear_contextvars
from structlog.stdlib import BoundLogger

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "MANDATORY_FIELDS",
    "LogConfig",
    "LogFormat",
    "UnifiedLogger",
    "configure_logging",
    "get_logger",
]

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
ROOT_LOGGER_NAME: Final[str] = "penguinetl"

MANDATORY_FIELDS: Final[Sequence[str]] = ("run_id", "stage")
"""Context every event is expected to carry; gaps are listed in ``missing_context``."""

_KEY_VALUE_ORDER: Final[Sequence[str]] = ("timestamp", "level", "run_id", "stage", "source", "message")


class LogFormat(str, Enum):
    """Renderers selectable through :class:`LogConfig`."""

    JSON = "json"
    KEY_VALUE = "key_value"


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Level and output format of the process-wide logging setup."""

    level: int | str = DEFAULT_LOG_LEVEL
    format: LogFormat = LogFormat.JSON


def _level_number(level: int | str) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelNamesMapping().get(level.upper())
    if number is None:
        raise ValueError(f"Unsupported log level: {level}")
    return number


def _flag_missing_context(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    absent = [name for name in MANDATORY_FIELDS if name not in event_dict]
    if absent:
        event_dict.setdefault("missing_context", absent)
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors shared by structlog events and foreign stdlib records."""

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _flag_missing_context,
        structlog.processors.EventRenamer("message"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _select_renderer(log_format: LogFormat) -> Any:
    if log_format is LogFormat.KEY_VALUE:
        return structlog.processors.KeyValueRenderer(key_order=_KEY_VALUE_ORDER, drop_missing=True)
    return structlog.processors.JSONRenderer(sort_keys=True, ensure_ascii=False, default=str)


def configure_logging(config: LogConfig | None = None) -> None:
    """Route structlog through a single stderr handler on the root logger.

    Safe to call repeatedly; each call replaces the previous handler, which is
    how the CLI applies ``--verbose`` and how tests capture output.
    """

    settings = config or LogConfig()
    level = _level_number(settings.level)
    pre_chain = _pre_chain()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _select_renderer(LogFormat(settings.format)),
            ],
        )
    )
    logging.basicConfig(handlers=[handler], level=level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> BoundLogger:
    return cast(BoundLogger, structlog.get_logger(name))


class UnifiedLogger:
    """Small facade over structlog used throughout the package."""

    @staticmethod
    def configure(config: LogConfig | None = None) -> None:
        configure_logging(config)

    @staticmethod
    def get(name: str | None = None) -> BoundLogger:
        return get_logger(name or ROOT_LOGGER_NAME)

    @staticmethod
    def bind(**context: Any) -> None:
        """Attach ``context`` to every later event in the current context."""

        bind_contextvars(**context)

    @staticmethod
    def reset() -> None:
        clear_contextvars()

    @staticmethod
    def scoped(**context: Any) -> AbstractContextManager[Any]:
        """Bind ``context`` for a ``with`` block; earlier values come back on exit."""

        return bound_contextvars(**context)

    @staticmethod
    def stage(stage: str, **context: Any) -> AbstractContextManager[Any]:
        return UnifiedLogger.scoped(stage=stage, **context)
