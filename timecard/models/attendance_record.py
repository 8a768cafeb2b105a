from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""AttendanceRecord model: one normalized per-day row of a time card export.

A record is created once during row classification and never changes
afterwards. Raw hour-source cells are kept verbatim for audit next to the
derived actual_hours / is_present / source values.
"""

__all__ = [
    "AttendanceRecord",
    "HoursSource",
]


class HoursSource(Enum):
    """Audit tag naming the raw column that produced actual_hours."""
    REGULAR_H = "Regular(H)"
    WORKED_HOURS = "Worked Hours"
    TOTAL_HOURS = "Total Hours"
    NONE = "None"


@dataclass(frozen=True)
class AttendanceRecord:
    """Normalized attendance record for one (employee, date) row.

    Duplicate (emp_id, date) rows are not merged: each produces its own record.
    """
    row_number: int  # 0-based index of the source row in the raw grid
    emp_id: str
    name: str
    dept: str
    date: str  # opaque, not calendar-validated
    clock_in: str
    clock_out: str
    raw_regular_h: Any  # None when the column is absent
    raw_worked_hours: Any
    raw_total_hours: Any
    actual_hours: float
    is_present: bool
    source: HoursSource

    @property
    def record_id(self) -> str:
        return f"{self.emp_id}-{self.date}"

    @property
    def status(self) -> str:
        return "Present" if self.is_present else "Absent"
