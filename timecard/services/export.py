from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..models.employee_summary import EmployeeSummary

"""Export row builders for the Summary and Details sheets.

Rows are built from the summaries the caller passes in (normally the
filtered/sorted view), so exports match what is on screen.
"""

__all__ = [
    "SUMMARY_COLUMNS",
    "DETAIL_COLUMNS",
    "build_summary_rows",
    "build_detail_rows",
]

SUMMARY_COLUMNS = [
    "Employee ID",
    "Name",
    "Department",
    "Days Present",
    "Total Actual Hours",
    "Equivalent Days (8h)",
]

DETAIL_COLUMNS = [
    "Employee ID",
    "Name",
    "Date",
    "Clock In",
    "Clock Out",
    "Regular(H) Raw",
    "Worked Hours Raw",
    "Total Hours Raw",
    "Calculated Actual Hours",
    "Calculation Source",
    "Status",
]


def _raw(value: Any) -> Any:
    # 列なし (None) は空セルとして出力
    return "" if value is None else value


def build_summary_rows(summaries: Iterable[EmployeeSummary]) -> list[dict[str, Any]]:
    return [
        {
            "Employee ID": s.emp_id,
            "Name": s.name,
            "Department": s.dept,
            "Days Present": s.days_present,
            "Total Actual Hours": f"{s.total_actual_hours:.2f}",
            "Equivalent Days (8h)": f"{s.equivalent_days:.2f}",
        }
        for s in summaries
    ]


def build_detail_rows(summaries: Iterable[EmployeeSummary]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for s in summaries:
        for rec in s.records:
            rows.append(
                {
                    "Employee ID": rec.emp_id,
                    "Name": rec.name,
                    "Date": rec.date,
                    "Clock In": rec.clock_in,
                    "Clock Out": rec.clock_out,
                    "Regular(H) Raw": _raw(rec.raw_regular_h),
                    "Worked Hours Raw": _raw(rec.raw_worked_hours),
                    "Total Hours Raw": _raw(rec.raw_total_hours),
                    "Calculated Actual Hours": f"{rec.actual_hours:.2f}",
                    "Calculation Source": rec.source.value,
                    "Status": rec.status,
                }
            )
    return rows
