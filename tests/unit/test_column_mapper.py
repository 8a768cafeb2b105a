from __future__ import annotations

import pytest

from timecard.models.column_map import ABSENT, ColumnMap, SemanticKey
from timecard.services.column_mapper import MissingColumnsError, map_columns, resolve_labels

FULL_HEADER = [
    "Employee ID", "First Name", "Department", "Date",
    "Clock In", "Clock Out", "Total Hours", "Worked Hours", "Regular(H)",
]


def test_map_full_header():
    cm = map_columns(FULL_HEADER)
    assert cm == ColumnMap(
        emp_id=0, name=1, dept=2, date=3, clock_in=4, clock_out=5,
        total_hours=6, worked_hours=7, regular_h=8,
    )


def test_optional_columns_default_to_absent():
    cm = map_columns(["Employee ID", "Date", "Regular(H)"])
    assert cm.emp_id == 0
    assert cm.date == 1
    assert cm.regular_h == 2
    for key in (SemanticKey.NAME, SemanticKey.DEPT, SemanticKey.WORKED_HOURS, SemanticKey.TOTAL_HOURS):
        assert cm.is_absent(key)
        assert cm.position(key) == ABSENT


def test_header_cells_trimmed_before_matching():
    cm = map_columns([" Employee ID", "Date ", " Worked Hours "])
    assert cm.worked_hours == 2


def test_first_occurrence_wins():
    cm = map_columns(["Employee ID", "Date", "Date"])
    assert cm.date == 1


@pytest.mark.parametrize(
    "header, missing",
    [
        (["First Name", "Date"], ["empId"]),
        (["Employee ID", "First Name"], ["date"]),
        (["First Name", "Department"], ["empId", "date"]),
    ],
)
def test_missing_required_columns(header, missing):
    with pytest.raises(MissingColumnsError) as e:
        map_columns(header)
    assert e.value.missing == missing
    assert str(e.value) == f"Critical columns missing: {', '.join(missing)}"


def test_label_overrides():
    labels = resolve_labels({"empId": "Emp No.", "regularH": "Regular"})
    cm = map_columns(["Emp No.", "Date", "Regular"], labels)
    assert cm.emp_id == 0
    assert cm.regular_h == 2
    assert labels[SemanticKey.DATE] == "Date"


def test_as_dict_uses_camel_case_keys():
    cm = map_columns(["Employee ID", "Date"])
    d = cm.as_dict()
    assert d["empId"] == 0
    assert d["date"] == 1
    assert d["regularH"] == ABSENT
    assert set(d) == {k.value for k in SemanticKey}
