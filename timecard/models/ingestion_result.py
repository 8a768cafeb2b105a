from __future__ import annotations

from dataclasses import dataclass

from .attendance_record import AttendanceRecord
from .column_map import ColumnMap
from .employee_summary import EmployeeSummary

"""IngestionResult model: complete output of one ingestion run.

A result is only produced when the whole grid was processed; a new ingestion
replaces it wholesale.
"""

__all__ = [
    "IngestionResult",
]


@dataclass(frozen=True)
class IngestionResult:
    summaries: tuple[EmployeeSummary, ...]  # first-seen order
    records: tuple[AttendanceRecord, ...]  # grid row order
    header_row_index: int
    column_map: ColumnMap
    skipped_rows: int = 0  # blank / footer rows (empId and date both empty)

    @property
    def total_records(self) -> int:
        return len(self.records)

    @property
    def present_days(self) -> int:
        return sum(s.days_present for s in self.summaries)

    @property
    def total_actual_hours(self) -> float:
        return sum(s.total_actual_hours for s in self.summaries)
