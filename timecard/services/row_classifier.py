from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.attendance_record import AttendanceRecord, HoursSource
from ..models.column_map import ColumnMap, SemanticKey
from .value_parsers import cell_text, is_not_empty, parse_time_string_to_decimal, safe_float

"""Row classifier: presence rule + hours-source fallback per data row.

Presence:
    Regular(H) parses to a value > 0, OR Worked Hours is non-empty.
    Total Hours never contributes to presence.

Actual hours (first matching rule in HOURS_RULES wins):
    1. Regular(H) > 0           -> Regular(H) value
    2. Worked Hours non-empty   -> Worked Hours parsed as "HH:MM"
    3. Total Hours non-empty    -> Total Hours parsed as "HH:MM"
    4. otherwise                -> 0, source None

A non-empty Worked Hours cell marks presence even when it parses to 0
("0:00", garbage), so a record can be present with 0 actual hours.
"""

__all__ = [
    "HourInputs",
    "HoursRule",
    "HOURS_RULES",
    "is_present",
    "select_hours",
    "classify_row",
    "classify_rows",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HourInputs:
    """Raw hour-source cells of one row (None when the column is absent)."""
    regular_h: Any = None
    worked_hours: Any = None
    total_hours: Any = None

    @property
    def regular_h_value(self) -> float:
        return safe_float(self.regular_h)


@dataclass(frozen=True)
class HoursRule:
    source: HoursSource
    applies: Callable[[HourInputs], bool]
    value: Callable[[HourInputs], float]


HOURS_RULES: tuple[HoursRule, ...] = (
    HoursRule(
        HoursSource.REGULAR_H,
        applies=lambda h: h.regular_h_value > 0,
        value=lambda h: h.regular_h_value,
    ),
    HoursRule(
        HoursSource.WORKED_HOURS,
        applies=lambda h: is_not_empty(h.worked_hours),
        value=lambda h: parse_time_string_to_decimal(h.worked_hours),
    ),
    HoursRule(
        HoursSource.TOTAL_HOURS,
        applies=lambda h: is_not_empty(h.total_hours),
        value=lambda h: parse_time_string_to_decimal(h.total_hours),
    ),
)


def is_present(hours: HourInputs) -> bool:
    return hours.regular_h_value > 0 or is_not_empty(hours.worked_hours)


def select_hours(hours: HourInputs) -> tuple[float, HoursSource]:
    for rule in HOURS_RULES:
        if rule.applies(hours):
            return rule.value(hours), rule.source
    return 0.0, HoursSource.NONE


def _cell(row: Sequence[Any], column_map: ColumnMap, key: SemanticKey, absent: Any) -> Any:
    """Cell value for a semantic key; `absent` when unmapped, "" past row end."""
    if column_map.is_absent(key):
        return absent
    idx = column_map.position(key)
    return row[idx] if idx < len(row) else ""


def classify_row(
    row: Sequence[Any] | None,
    row_number: int,
    column_map: ColumnMap,
    unknown_label: str = "Unknown",
) -> AttendanceRecord | None:
    """Classify one data row; returns None for rows that are skipped.

    Skipped rows (empty row, or both emp id and date empty) are incidental
    footer / blank rows, not errors.
    """
    if not row:
        return None
    raw_emp_id = _cell(row, column_map, SemanticKey.EMP_ID, "")
    raw_date = _cell(row, column_map, SemanticKey.DATE, "")
    if not is_not_empty(raw_emp_id) and not is_not_empty(raw_date):
        return None

    hours = HourInputs(
        regular_h=_cell(row, column_map, SemanticKey.REGULAR_H, None),
        worked_hours=_cell(row, column_map, SemanticKey.WORKED_HOURS, None),
        total_hours=_cell(row, column_map, SemanticKey.TOTAL_HOURS, None),
    )
    actual_hours, source = select_hours(hours)

    return AttendanceRecord(
        row_number=row_number,
        emp_id=cell_text(raw_emp_id),
        name=cell_text(_cell(row, column_map, SemanticKey.NAME, unknown_label)),
        dept=cell_text(_cell(row, column_map, SemanticKey.DEPT, unknown_label)),
        date=cell_text(raw_date),
        clock_in=cell_text(_cell(row, column_map, SemanticKey.CLOCK_IN, "")),
        clock_out=cell_text(_cell(row, column_map, SemanticKey.CLOCK_OUT, "")),
        raw_regular_h=hours.regular_h,
        raw_worked_hours=hours.worked_hours,
        raw_total_hours=hours.total_hours,
        actual_hours=actual_hours,
        is_present=is_present(hours),
        source=source,
    )


def classify_rows(
    grid: Sequence[Sequence[Any]],
    header_row_index: int,
    column_map: ColumnMap,
    unknown_label: str = "Unknown",
    on_row: Callable[[], None] | None = None,
) -> Iterator[AttendanceRecord | None]:
    """Classify every row after the header, yielding None for skipped rows.

    on_row is called once per data row (progress display hook).
    """
    for i in range(header_row_index + 1, len(grid)):
        record = classify_row(grid[i], i, column_map, unknown_label)
        if record is None:
            logger.debug(f"row {i} skipped (no employee id / date)")
        if on_row is not None:
            on_row()
        yield record
