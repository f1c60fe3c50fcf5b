"""Shared pytest fixtures for penguinetl tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
import pytest

from penguinetl.core.logger import LogConfig, UnifiedLogger

RAW_HEADER: tuple[str, ...] = (
    "studyName",
    "Sample Number",
    "Species",
    "Region",
    "Island",
    "Stage",
    "Individual ID",
    "Clutch Completion",
    "Date Egg",
    "Culmen Length (mm)",
    "Culmen Depth (mm)",
    "Flipper Length (mm)",
    "Body Mass (g)",
    "Sex",
    "Delta 15 N (o/oo)",
    "Delta 13 C (o/oo)",
    "Comments",
)

ADELIE = "Adelie Penguin (Pygoscelis adeliae)"
GENTOO = "Gentoo penguin (Pygoscelis papua)"
CHINSTRAP = "Chinstrap penguin (Pygoscelis antarctica)"

# (island, species, date, culmen length, culmen depth, flipper, mass, sex)
ISLAND_ROWS: dict[str, list[tuple[Any, ...]]] = {
    "Torgersen": [
        ("Torgersen", ADELIE, "2007-11-11", 39.1, 18.7, 181, 3750, "MALE"),
        ("Torgersen", ADELIE, "2007-11-11", 39.5, 17.4, 186, 3800, "FEMALE"),
        ("Torgersen", ADELIE, "2007-11-16", np.nan, np.nan, np.nan, np.nan, np.nan),
    ],
    "Biscoe": [
        ("Biscoe", GENTOO, "2007-11-27", 46.1, 13.2, 211, 4500, "FEMALE"),
        ("Biscoe", GENTOO, "2008-11-15", 50.0, 16.3, 230, 5700, "MALE"),
    ],
    "Dream": [
        ("Dream", CHINSTRAP, "2007-11-19", 46.5, 17.9, 192, 3500, "FEMALE"),
        ("Dream", CHINSTRAP, "2007-11-19", 50.0, 19.5, 196, 3900, "MALE"),
        ("Dream", CHINSTRAP, "2009-11-18", 51.3, 19.2, 193, 3650, "."),
        ("Dream", CHINSTRAP, "2009-11-21", 45.4, 18.7, 188, 3525, "FEMALE"),
    ],
}


def make_raw_frame(rows: list[tuple[Any, ...]], *, study: str = "PAL0708") -> pd.DataFrame:
    """Build a frame laid out like ``penguins_raw`` from compact row tuples."""

    records = []
    for number, (island, species, date, length, depth, flipper, mass, sex) in enumerate(rows, 1):
        records.append(
            {
                "studyName": study,
                "Sample Number": number,
                "Species": species,
                "Region": "Anvers",
                "Island": island,
                "Stage": "Adult, 1 Egg Stage",
                "Individual ID": f"N{number}A1",
                "Clutch Completion": "Yes",
                "Date Egg": date,
                "Culmen Length (mm)": length,
                "Culmen Depth (mm)": depth,
                "Flipper Length (mm)": flipper,
                "Body Mass (g)": mass,
                "Sex": sex,
                "Delta 15 N (o/oo)": 8.94956,
                "Delta 13 C (o/oo)": -24.69454,
                "Comments": np.nan,
            }
        )
    return pd.DataFrame.from_records(records, columns=list(RAW_HEADER))


def write_raw_csv(frame: pd.DataFrame, path: Path) -> Path:
    frame.to_csv(path, index=False, na_rep="NA")
    return path


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    UnifiedLogger.configure(LogConfig(level="DEBUG"))
    UnifiedLogger.reset()
    yield
    UnifiedLogger.reset()


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    """Every sample row from all three islands in one raw table."""

    rows = [row for island_rows in ISLAND_ROWS.values() for row in island_rows]
    return make_raw_frame(rows)


@pytest.fixture
def raw_csv(tmp_path: Path, raw_frame: pd.DataFrame) -> Path:
    return write_raw_csv(raw_frame, tmp_path / "penguins_raw.csv")


@pytest.fixture
def island_dir(tmp_path: Path) -> Path:
    """Directory holding one raw CSV per island, named like ``biscoe.csv``."""

    directory = tmp_path / "data"
    directory.mkdir()
    for island, rows in ISLAND_ROWS.items():
        write_raw_csv(make_raw_frame(rows), directory / f"{island.lower()}.csv")
    return directory


@pytest.fixture
def island_files(island_dir: Path) -> list[Path]:
    """The per-island files in ``ISLAND_ROWS`` order."""

    return [island_dir / f"{island.lower()}.csv" for island in ISLAND_ROWS]


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write literal CSV ``text`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def island_rows() -> dict[str, list[tuple[Any, ...]]]:
    return ISLAND_ROWS


@pytest.fixture
def raw_frame_factory() -> Callable[..., pd.DataFrame]:
    return make_raw_frame
