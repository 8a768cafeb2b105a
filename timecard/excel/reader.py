from __future__ import annotations

import csv
import math
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet reader: export file -> raw grid of row arrays.

The first sheet is read without a header (the header row is located later by
the ingestion pipeline). Blank cells become "", Excel time-of-day cells
become "HH:MM" strings and duration cells ([h]:mm) become "H:MM" (24h and
over kept). Everything else is passed through untyped.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "GridReadError",
    "read_grid",
    "dataframe_to_grid",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xls", ".csv")


class GridReadError(Exception):
    """Raised when an export file cannot be read into a grid."""


def _normalize_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, timedelta):
        # [h]:mm 書式の継続時間セル。24h 以上もそのまま "H:MM"
        minutes = round(value.total_seconds() / 60)
        hours, mins = divmod(minutes, 60)
        return f"{hours}:{mins:02d}"
    if isinstance(value, time):
        # 勤務時間セル (8:15) は文字列として扱う
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, datetime) and value.time() == time(0, 0):
        return value.strftime("%Y-%m-%d")
    return value


def dataframe_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a list of row lists."""
    return [[_normalize_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]


def read_grid(path: Path) -> list[list[Any]]:
    """Read the first sheet of an .xlsx/.xls/.csv export as a raw grid.

    Raises:
        GridReadError: unsupported extension, missing file or decode failure
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise GridReadError(f"unsupported file type '{path.suffix}' (expected .xlsx, .xls or .csv)")
    if not path.exists():
        raise GridReadError(f"file not found: {path}")
    try:
        if suffix == ".csv":
            # 列数が行ごとに異なる (タイトル行) ため python engine + 固定幅で読み込む
            df = pd.read_csv(
                path,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                engine="python",
                names=list(range(_csv_width(path))),
                encoding="utf-8-sig",
            )
        else:
            df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    except Exception as e:
        raise GridReadError(f"failed to read {path.name}: {e}") from e
    return dataframe_to_grid(df)


def _csv_width(path: Path) -> int:
    with path.open(newline="", encoding="utf-8-sig") as f:
        return max((len(r) for r in csv.reader(f)), default=1) or 1
