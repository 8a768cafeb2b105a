from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""View state for the query/view layer (search, issue filter, sort, expansion).

ViewState is immutable: each interaction produces a new state that is passed
into the pure filter/sort functions of ``timecard.services.view``.
"""

__all__ = [
    "SortDirection",
    "SortKey",
    "ViewState",
]


class SortKey(Enum):
    EMP_ID = "empId"
    NAME = "name"
    DEPT = "dept"
    DAYS_PRESENT = "daysPresent"
    TOTAL_ACTUAL_HOURS = "totalActualHours"
    EQUIVALENT_DAYS = "equivalentDays"

    @property
    def attribute(self) -> str:
        """EmployeeSummary attribute holding this key's value."""
        return self.name.lower()

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC_KEYS


_NUMERIC_KEYS = frozenset({SortKey.DAYS_PRESENT, SortKey.TOTAL_ACTUAL_HOURS, SortKey.EQUIVALENT_DAYS})


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ViewState:
    search_text: str = ""
    issues_only: bool = False
    sort_key: SortKey = SortKey.EMP_ID
    sort_direction: SortDirection = SortDirection.ASC
    expanded: frozenset[str] = field(default_factory=frozenset)  # expanded emp ids
