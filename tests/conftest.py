# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from timecard.logging.init import reset_logging

HEADER = [
    "Employee ID", "First Name", "Department", "Date",
    "Clock In", "Clock Out", "Total Hours", "Worked Hours", "Regular(H)",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TIMECARD_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_grid() -> list[list[object]]:
    """Export with two banner rows, header at index 2 and a blank footer."""
    return [
        ["Total Time Card", "", "", "", "", "", "", "", ""],
        ["Period: 2024-01-01 ~ 2024-01-03", "", "", "", "", "", "", "", ""],
        HEADER,
        ["E1", "Ana", "Production", "2024-01-01", "08:00", "16:30", "8:30", "8:00", 8],
        ["E1", "Ana", "Production", "2024-01-02", "08:00", "16:00", "8:00", "8:00", ""],
        ["E1", "Ana", "Production", "2024-01-03", "", "", "", "", ""],
        ["E2", "Ben", "Warehouse", "2024-01-01", "09:00", "", "0:00", "0:00", ""],
        ["E3", "Chen", "Office", "2024-01-01", "09:00", "", "7:30", "", ""],
        ["", "", "", "", "", "", "", "", ""],
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """header_scan_rows: 20
hours_per_day: 8
unknown_label: Unknown
export:
  path: out/Attendance_Analysis.xlsx
  format: xlsx
default_sort:
  key: empId
  direction: asc
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "timecard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_export():
    """Write a header-less grid to .xlsx (openpyxl) or .csv and return the path."""
    def _make(path: Path, rows: list[list[object]]) -> Path:
        df = pd.DataFrame(rows)
        if path.suffix == ".csv":
            df.to_csv(path, header=False, index=False)
        else:
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name="Total Time Card", header=False, index=False)
        return path
    return _make
