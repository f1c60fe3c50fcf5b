"""Deterministic file output for normalised and split datasets."""

from __future__ import annotations

import os
from pathlib import Path

import pandas as pd

from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import UnifiedLogger
from penguinetl.normalizers.columns import canonicalize_column_name

__all__ = ["resolve_column", "split_by_group", "write_frame_atomic"]

logger = UnifiedLogger.get(__name__)


def write_frame_atomic(
    df: pd.DataFrame,
    path: str | os.PathLike[str],
    *,
    na_rep: str = "",
    encoding: str = "utf-8",
) -> Path:
    """Write ``df`` as CSV to ``path`` via a temporary file and ``os.replace``.

    A failed write removes the temporary file and leaves ``path`` untouched.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    try:
        df.to_csv(
            path_or_buf=tmp_path,
            index=False,
            na_rep=na_rep,
            encoding=encoding,
            lineterminator="\n",
        )
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info(LogEvents.WRITE_DATASET_FINISH, path=str(target), rows=int(df.shape[0]))
    return target


def resolve_column(frame: pd.DataFrame, name: str) -> str:
    """Find ``name`` among ``frame`` headers, exactly or by canonical form."""

    if name in frame.columns:
        return name
    wanted = canonicalize_column_name(name)
    for column in frame.columns:
        if canonicalize_column_name(column) == wanted:
            return str(column)
    raise KeyError(f"column {name!r} not found; available: {list(frame.columns)}")


def split_by_group(
    frame: pd.DataFrame,
    column: str,
    output_dir: str | os.PathLike[str],
    *,
    encoding: str = "utf-8",
) -> dict[str, Path]:
    """Write one CSV per distinct value of ``column`` into ``output_dir``.

    Files are named after the canonicalised group value (``"Torgersen"`` ->
    ``torgersen.csv``) and hold the rows of that group with the original
    headers. Rows whose group value is missing are not written. Groups are
    processed in order of first appearance.
    """

    key = resolve_column(frame, column)
    destination = Path(output_dir)
    groups = [value for value in pd.unique(frame[key]) if not pd.isna(value)]

    file_names: dict[str, object] = {}
    for value in groups:
        file_name = f"{canonicalize_column_name(value)}.csv"
        if file_name in file_names:
            msg = (
                f"group values {file_names[file_name]!r} and {value!r} "
                f"both map to {file_name}"
            )
            raise ValueError(msg)
        file_names[file_name] = value

    written: dict[str, Path] = {}
    for file_name, value in file_names.items():
        subset = frame.loc[frame[key] == value]
        path = write_frame_atomic(subset, destination / file_name, encoding=encoding)
        logger.info(LogEvents.WRITE_GROUP_FINISH, group=str(value), rows=int(subset.shape[0]))
        written[str(value)] = path
    return written
