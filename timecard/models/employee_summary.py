from __future__ import annotations

from dataclasses import dataclass, field

from .attendance_record import AttendanceRecord

"""EmployeeSummary model: per-employee aggregate of attendance records.

Identity (name / department) comes from the first record seen for the id.
Counters only include records with is_present=True; absent records are still
listed in ``records``.
"""

__all__ = [
    "EmployeeSummary",
]


@dataclass(frozen=True)
class EmployeeSummary:
    emp_id: str
    name: str
    dept: str
    days_present: int
    total_actual_hours: float
    equivalent_days: float
    records: tuple[AttendanceRecord, ...] = field(default_factory=tuple)

    @property
    def has_issue(self) -> bool:
        """Presence recorded but hours summed to exactly zero."""
        return self.days_present > 0 and self.total_actual_hours == 0
