from __future__ import annotations

from collections.abc import Iterable

from ..models.attendance_record import AttendanceRecord
from ..models.employee_summary import EmployeeSummary

"""Aggregation of attendance records into per-employee summaries.

Summaries are created lazily on the first record of an employee id and keep
that record's name / department: later rows with a different name for the same
id do not overwrite it. Counters grow only from present records.
"""

__all__ = [
    "HOURS_PER_DAY",
    "EmployeeAccumulator",
    "aggregate",
]

HOURS_PER_DAY = 8.0


class EmployeeAccumulator:
    """Mutable running totals for one employee during a single ingestion."""

    def __init__(self, emp_id: str, name: str, dept: str) -> None:
        self.emp_id = emp_id
        self.name = name
        self.dept = dept
        self.days_present = 0
        self.total_actual_hours = 0.0
        self.records: list[AttendanceRecord] = []

    def add(self, record: AttendanceRecord) -> None:
        self.records.append(record)
        if record.is_present:
            self.days_present += 1
            self.total_actual_hours += record.actual_hours

    def finalize(self, hours_per_day: float = HOURS_PER_DAY) -> EmployeeSummary:
        return EmployeeSummary(
            emp_id=self.emp_id,
            name=self.name,
            dept=self.dept,
            days_present=self.days_present,
            total_actual_hours=self.total_actual_hours,
            equivalent_days=self.total_actual_hours / hours_per_day,
            records=tuple(self.records),
        )


def aggregate(
    records: Iterable[AttendanceRecord],
    hours_per_day: float = HOURS_PER_DAY,
) -> tuple[EmployeeSummary, ...]:
    """Group records by emp_id and return finalized summaries in first-seen order."""
    employees: dict[str, EmployeeAccumulator] = {}
    for record in records:
        acc = employees.get(record.emp_id)
        if acc is None:
            # first-seen wins for name / dept
            acc = EmployeeAccumulator(record.emp_id, record.name, record.dept)
            employees[record.emp_id] = acc
        acc.add(record)
    return tuple(acc.finalize(hours_per_day) for acc in employees.values())
