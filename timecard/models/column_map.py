from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum

"""ColumnMap model: semantic column keys resolved to header positions.

The set of semantic keys is closed. Each key is looked up by its exact header
label in the located header row; a label that is not found resolves to ABSENT
(a sentinel, not an error). Only emp_id and date are load-bearing.
"""

__all__ = [
    "ABSENT",
    "ColumnMap",
    "SemanticKey",
    "DEFAULT_LABELS",
    "REQUIRED_KEYS",
]

# 列が見つからない場合の位置 (indexOf 互換)
ABSENT = -1


class SemanticKey(Enum):
    """Closed set of semantic column keys.

    Values are the camelCase key names used in error messages and config.
    """
    EMP_ID = "empId"
    NAME = "name"
    DEPT = "dept"
    DATE = "date"
    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"
    TOTAL_HOURS = "totalHours"
    WORKED_HOURS = "workedHours"
    REGULAR_H = "regularH"

    @property
    def field_name(self) -> str:
        return self.name.lower()


# Exact, case-sensitive header labels of a ZKTeco "Total Time Card" export
DEFAULT_LABELS: dict[SemanticKey, str] = {
    SemanticKey.EMP_ID: "Employee ID",
    SemanticKey.NAME: "First Name",
    SemanticKey.DEPT: "Department",
    SemanticKey.DATE: "Date",
    SemanticKey.CLOCK_IN: "Clock In",
    SemanticKey.CLOCK_OUT: "Clock Out",
    SemanticKey.TOTAL_HOURS: "Total Hours",
    SemanticKey.WORKED_HOURS: "Worked Hours",
    SemanticKey.REGULAR_H: "Regular(H)",
}

REQUIRED_KEYS: tuple[SemanticKey, ...] = (SemanticKey.EMP_ID, SemanticKey.DATE)


@dataclass(frozen=True)
class ColumnMap:
    """Zero-based header positions for every semantic key (ABSENT if unmapped)."""
    emp_id: int = ABSENT
    name: int = ABSENT
    dept: int = ABSENT
    date: int = ABSENT
    clock_in: int = ABSENT
    clock_out: int = ABSENT
    total_hours: int = ABSENT
    worked_hours: int = ABSENT
    regular_h: int = ABSENT

    @classmethod
    def from_positions(cls, positions: dict[SemanticKey, int]) -> ColumnMap:
        return cls(**{key.field_name: idx for key, idx in positions.items()})

    def position(self, key: SemanticKey) -> int:
        return getattr(self, key.field_name)

    def is_absent(self, key: SemanticKey) -> bool:
        return self.position(key) == ABSENT

    def missing_required(self) -> list[SemanticKey]:
        """Required keys that did not resolve, in declaration order."""
        return [k for k in REQUIRED_KEYS if self.is_absent(k)]

    def as_dict(self) -> dict[str, int]:
        """camelCase key -> position, for logging and inspection output."""
        by_field = {k.field_name: k.value for k in SemanticKey}
        return {by_field[f.name]: getattr(self, f.name) for f in fields(self)}
