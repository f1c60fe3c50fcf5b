"""Reading and discovery of Raw Record Sources."""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, NoReturn, TypeAlias

import pandas as pd

from penguinetl.core.errors import SourceUnavailable
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import UnifiedLogger

__all__ = [
    "DEFAULT_PATTERN",
    "Source",
    "discover_sources",
    "read_source",
    "source_label",
]

Source: TypeAlias = str | os.PathLike[str] | IO[str]
"""A filesystem path or an already opened text stream."""

DEFAULT_PATTERN = "*.csv"

logger = UnifiedLogger.get(__name__)


def _is_stream(source: object) -> bool:
    return hasattr(source, "read") and not isinstance(source, (str, os.PathLike))


def source_label(source: Source) -> str:
    """Return a stable human readable identifier for ``source``.

    Unnamed streams are told apart by object identity.
    """

    if _is_stream(source):
        name = getattr(source, "name", None)
        if isinstance(name, str) and name:
            return name
        return f"<stream {type(source).__name__} at {id(source):#x}>"
    return os.fspath(source)  # type: ignore[arg-type]


def read_source(source: Source, *, encoding: str = "utf-8") -> pd.DataFrame:
    """Load every row of ``source`` as strings.

    Values are kept as text (missing markers become ``NaN``) so that parsing
    and coercion happen in the normalisers rather than in the CSV reader.

    Raises
    ------
    SourceUnavailable
        If the resource cannot be opened, decoded or parsed as a CSV table.
    """

    label = source_label(source)
    logger.debug(LogEvents.SOURCE_READ_START, source=label)
    if not _is_stream(source) and Path(source).is_dir():  # type: ignore[arg-type]
        _raise_unavailable(label, "is a directory, not a file", None)
    try:
        if _is_stream(source):
            frame = pd.read_csv(source, dtype=str)  # type: ignore[arg-type]
        else:
            frame = pd.read_csv(Path(source), dtype=str, encoding=encoding)  # type: ignore[arg-type]
    except FileNotFoundError as exc:
        _raise_unavailable(label, "file does not exist", exc)
    except PermissionError as exc:
        _raise_unavailable(label, "permission denied", exc)
    except pd.errors.EmptyDataError as exc:
        _raise_unavailable(label, "no tabular data found", exc)
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        _raise_unavailable(label, f"cannot parse table: {exc}", exc)
    except OSError as exc:
        _raise_unavailable(label, exc.strerror or str(exc), exc)
    return frame


def _raise_unavailable(label: str, reason: str, exc: BaseException | None) -> NoReturn:
    logger.warning(LogEvents.SOURCE_READ_ERROR, source=label, error=reason)
    raise SourceUnavailable(label, reason) from exc


def discover_sources(directory: str | os.PathLike[str], pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Return the files under ``directory`` matching ``pattern``.

    The result is ordered by path relative to ``directory`` so repeated scans
    of an unchanged directory yield the same sequence. Only regular files are
    returned; ``pattern`` follows :meth:`pathlib.Path.glob` semantics, so
    ``"**/*.csv"`` recurses.
    """

    root = Path(directory)
    if not root.is_dir():
        raise SourceUnavailable(os.fspath(root), "directory does not exist")
    found = sorted(
        (path for path in root.glob(pattern) if path.is_file()),
        key=lambda path: path.relative_to(root).as_posix(),
    )
    logger.info(
        LogEvents.SOURCE_DISCOVER_FINISH,
        directory=os.fspath(root),
        pattern=pattern,
        count=len(found),
    )
    return found
