from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from ..models.employee_summary import EmployeeSummary
from ..models.view_state import SortDirection, SortKey, ViewState

"""Query/view layer over finalized employee summaries.

Pure functions: the caller holds a ViewState and passes it in on every query.
Filtering is text search (emp id / name / department, case-insensitive, OR)
AND-combined with the optional issue filter; sorting uses a single active key.
"""

__all__ = [
    "DashboardStats",
    "toggle_sort",
    "toggle_expanded",
    "matches_search",
    "is_issue",
    "natural_key",
    "apply_view",
    "dashboard_stats",
]

_DIGITS_RE = re.compile(r"(\d+)")


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    total_records: int
    total_actual_hours: float


def toggle_sort(state: ViewState, key: SortKey) -> ViewState:
    """Select a sort key: same key flips direction, a new key starts ascending."""
    if state.sort_key == key and state.sort_direction == SortDirection.ASC:
        return replace(state, sort_direction=SortDirection.DESC)
    return replace(state, sort_key=key, sort_direction=SortDirection.ASC)


def toggle_expanded(state: ViewState, emp_id: str) -> ViewState:
    if emp_id in state.expanded:
        return replace(state, expanded=state.expanded - {emp_id})
    return replace(state, expanded=state.expanded | {emp_id})


def matches_search(summary: EmployeeSummary, text: str) -> bool:
    needle = text.lower()
    return (
        needle in str(summary.emp_id).lower()
        or needle in str(summary.name).lower()
        or needle in str(summary.dept).lower()
    )


def is_issue(summary: EmployeeSummary) -> bool:
    """Presence recorded on at least one day but hours summed to exactly zero."""
    return summary.days_present > 0 and summary.total_actual_hours == 0


def natural_key(value: Any) -> tuple[tuple[int, int, str], ...]:
    """Case-insensitive, numeric-aware sort key ("E2" < "E10")."""
    parts = _DIGITS_RE.split(str(value).lower())
    # 数字は数値として、それ以外は文字列として比較 (数字が先)
    return tuple((0, int(p), p) if p.isdecimal() else (1, 0, p) for p in parts if p)


def _sort_value(summary: EmployeeSummary, key: SortKey) -> Any:
    value = getattr(summary, key.attribute)
    return value if key.is_numeric else natural_key(value)


def apply_view(summaries: Iterable[EmployeeSummary], state: ViewState) -> list[EmployeeSummary]:
    """Filter then sort summaries for display/export. Input is not mutated."""
    result = [s for s in summaries if matches_search(s, state.search_text)]
    if state.issues_only:
        result = [s for s in result if is_issue(s)]
    return sorted(
        result,
        key=lambda s: _sort_value(s, state.sort_key),
        reverse=state.sort_direction == SortDirection.DESC,
    )


def dashboard_stats(summaries: Sequence[EmployeeSummary]) -> DashboardStats:
    """Headline figures over the unfiltered summary list."""
    return DashboardStats(
        total_employees=len(summaries),
        total_records=sum(len(s.records) for s in summaries),
        total_actual_hours=sum(s.total_actual_hours for s in summaries),
    )
