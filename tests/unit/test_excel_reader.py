from __future__ import annotations

from datetime import datetime, time, timedelta
from pathlib import Path

import pandas as pd
import pytest

from timecard.excel.reader import GridReadError, dataframe_to_grid, read_grid


def test_read_xlsx_first_sheet_only(temp_workdir: Path):
    path = temp_workdir / "multi.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["Title"], ["Employee ID", "Date"], ["E1", "2024-01-01"]]).to_excel(
            writer, sheet_name="First", header=False, index=False
        )
        pd.DataFrame([["other"]]).to_excel(writer, sheet_name="Second", header=False, index=False)
    grid = read_grid(path)
    assert grid[1][:2] == ["Employee ID", "Date"]
    assert grid[2][:2] == ["E1", "2024-01-01"]
    # blank cells become ""
    assert grid[0][1] == ""


def test_read_csv_ragged_rows(temp_workdir: Path):
    path = temp_workdir / "export.csv"
    path.write_text("Total Time Card\nEmployee ID,Date,Worked Hours\nE1,2024-01-01,8:15\n", encoding="utf-8")
    grid = read_grid(path)
    assert grid[0] == ["Total Time Card", "", ""]
    assert grid[1] == ["Employee ID", "Date", "Worked Hours"]
    assert grid[2] == ["E1", "2024-01-01", "8:15"]


def test_read_csv_with_bom(temp_workdir: Path):
    path = temp_workdir / "bom.csv"
    path.write_bytes("Employee ID,Date\nE1,2024-01-01\n".encode("utf-8-sig"))
    assert read_grid(path)[0] == ["Employee ID", "Date"]


def test_unsupported_extension(temp_workdir: Path):
    path = temp_workdir / "export.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(GridReadError):
        read_grid(path)


def test_missing_file(temp_workdir: Path):
    with pytest.raises(GridReadError) as e:
        read_grid(temp_workdir / "nope.xlsx")
    assert "file not found" in str(e.value)


def test_corrupt_xlsx(temp_workdir: Path):
    path = temp_workdir / "broken.xlsx"
    path.write_bytes(b"not a zip file")
    with pytest.raises(GridReadError) as e:
        read_grid(path)
    assert "broken.xlsx" in str(e.value)


def test_dataframe_to_grid_normalizes_cells():
    df = pd.DataFrame(
        [[None, float("nan"), time(8, 15), datetime(2024, 1, 2), datetime(2024, 1, 2, 9, 30), 7.5, "x"]],
        dtype=object,
    )
    (row,) = dataframe_to_grid(df)
    assert row[0] == ""
    assert row[1] == ""
    assert row[2] == "08:15"
    assert row[3] == "2024-01-02"
    assert row[4] == datetime(2024, 1, 2, 9, 30)
    assert row[5] == 7.5
    assert row[6] == "x"


def test_read_xlsx_duration_cells_as_hours_text(temp_workdir: Path):
    from openpyxl import Workbook

    path = temp_workdir / "durations.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["Employee ID", "Date", "Worked Hours"])
    ws.append(["E1", "2024-01-01", 0.34375])  # 8:15
    ws.append(["E1", "2024-01-02", 1.5])  # 36:00
    for row in (2, 3):
        ws.cell(row=row, column=3).number_format = "[h]:mm"
    wb.save(path)

    grid = read_grid(path)
    assert grid[1][2] == "8:15"
    assert grid[2][2] == "36:00"


def test_duration_cell_hours_reach_record(temp_workdir: Path):
    from openpyxl import Workbook

    from timecard.models.attendance_record import HoursSource
    from timecard.services.pipeline import ingest_file

    path = temp_workdir / "worked.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["Employee ID", "Date", "Worked Hours"])
    ws.append(["E1", "2024-01-01", 0.34375])
    ws.cell(row=2, column=3).number_format = "[h]:mm"
    wb.save(path)

    (rec,) = ingest_file(path).records
    assert rec.actual_hours == pytest.approx(8.25)
    assert rec.source is HoursSource.WORKED_HOURS


def test_normalize_timedelta_values():
    df = pd.DataFrame([[timedelta(hours=7, minutes=30), pd.Timedelta(hours=25, minutes=5)]])
    assert dataframe_to_grid(df) == [["7:30", "25:05"]]
