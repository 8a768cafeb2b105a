from __future__ import annotations

from dataclasses import replace

import pytest

from timecard.models.employee_summary import EmployeeSummary
from timecard.models.view_state import SortDirection, SortKey, ViewState
from timecard.services.view import (
    apply_view,
    dashboard_stats,
    is_issue,
    matches_search,
    natural_key,
    toggle_expanded,
    toggle_sort,
)


def _summary(emp_id, name="Ana", dept="Production", days=0, hours=0.0):
    return EmployeeSummary(
        emp_id=emp_id,
        name=name,
        dept=dept,
        days_present=days,
        total_actual_hours=hours,
        equivalent_days=hours / 8,
    )


@pytest.fixture()
def summaries():
    return [
        _summary("10", "Ben", "Warehouse", days=3, hours=24.0),
        _summary("2", "ana", "Production", days=1, hours=0.0),
        _summary("1", "Chen", "Office", days=0, hours=0.0),
        _summary("E20", "Dara", "Sales", days=2, hours=15.5),
    ]


def test_default_state():
    state = ViewState()
    assert state.sort_key is SortKey.EMP_ID
    assert state.sort_direction is SortDirection.ASC
    assert state.search_text == ""
    assert state.issues_only is False


def test_toggle_sort_flips_same_key_and_resets_on_new_key():
    state = ViewState()
    state = toggle_sort(state, SortKey.EMP_ID)
    assert (state.sort_key, state.sort_direction) == (SortKey.EMP_ID, SortDirection.DESC)
    state = toggle_sort(state, SortKey.EMP_ID)
    assert state.sort_direction is SortDirection.ASC
    state = toggle_sort(toggle_sort(state, SortKey.EMP_ID), SortKey.NAME)
    assert (state.sort_key, state.sort_direction) == (SortKey.NAME, SortDirection.ASC)


def test_toggle_expanded():
    state = toggle_expanded(ViewState(), "E1")
    assert state.expanded == frozenset({"E1"})
    assert toggle_expanded(state, "E1").expanded == frozenset()


def test_text_search_is_case_insensitive_over_three_fields(summaries):
    assert matches_search(summaries[0], "ware")
    assert matches_search(summaries[0], "BEN")
    assert matches_search(summaries[0], "10")
    assert not matches_search(summaries[0], "office")
    view = apply_view(summaries, ViewState(search_text="AN"))
    assert {s.emp_id for s in view} == {"2"}


def test_empty_search_keeps_everything(summaries):
    assert len(apply_view(summaries, ViewState())) == len(summaries)


def test_issue_filter(summaries):
    view = apply_view(summaries, ViewState(issues_only=True))
    assert [s.emp_id for s in view] == ["2"]
    assert is_issue(summaries[1]) and not is_issue(summaries[2])


def test_issue_filter_excludes_hours_and_no_presence():
    e1 = _summary("E1", days=3, hours=24.0)
    e2 = _summary("E2", days=0, hours=0.0)
    assert apply_view([e1, e2], ViewState(issues_only=True)) == []


def test_sort_emp_id_natural_order(summaries):
    view = apply_view(summaries, ViewState())
    assert [s.emp_id for s in view] == ["1", "2", "10", "E20"]
    view = apply_view(summaries, ViewState(sort_direction=SortDirection.DESC))
    assert [s.emp_id for s in view] == ["E20", "10", "2", "1"]


def test_sort_name_case_insensitive(summaries):
    view = apply_view(summaries, ViewState(sort_key=SortKey.NAME))
    assert [s.name for s in view] == ["ana", "Ben", "Chen", "Dara"]


@pytest.mark.parametrize(
    "key, expected",
    [
        (SortKey.DAYS_PRESENT, ["1", "2", "E20", "10"]),
        (SortKey.TOTAL_ACTUAL_HOURS, ["2", "1", "E20", "10"]),  # ties keep input order
        (SortKey.EQUIVALENT_DAYS, ["2", "1", "E20", "10"]),
    ],
)
def test_sort_numeric_keys(summaries, key, expected):
    view = apply_view(summaries, ViewState(sort_key=key))
    assert [s.emp_id for s in view] == expected


def test_apply_view_does_not_mutate_input(summaries):
    before = list(summaries)
    apply_view(summaries, ViewState(sort_key=SortKey.NAME, sort_direction=SortDirection.DESC))
    assert summaries == before


def test_filter_and_sort_commute_on_membership(summaries):
    state = ViewState(issues_only=True, sort_key=SortKey.TOTAL_ACTUAL_HOURS)
    filtered_then_sorted = apply_view(summaries, state)
    sorted_first = apply_view(summaries, replace(state, issues_only=False))
    sorted_then_filtered = [s for s in sorted_first if is_issue(s)]
    assert {s.emp_id for s in filtered_then_sorted} == {s.emp_id for s in sorted_then_filtered}


def test_natural_key():
    values = ["E10", "e2", "E1", "10", "9", ""]
    assert sorted(values, key=natural_key) == ["", "9", "10", "E1", "e2", "E10"]
    # 上付き数字は \d に含まれないので文字列として比較
    assert natural_key("A1\u00b2") == ((1, 0, "a"), (0, 1, "1"), (1, 0, "\u00b2"))
    ordered = apply_view([_summary("A2", "y"), _summary("A1\u00b2", "x")], ViewState())
    assert [s.emp_id for s in ordered] == ["A1\u00b2", "A2"]


def test_dashboard_stats(summaries):
    stats = dashboard_stats(summaries)
    assert stats.total_employees == 4
    assert stats.total_records == 0
    assert stats.total_actual_hours == pytest.approx(39.5)
