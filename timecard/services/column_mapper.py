from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..models.column_map import ABSENT, DEFAULT_LABELS, ColumnMap, SemanticKey
from .header_locator import normalize_header_cells

"""Column mapper: semantic keys -> positions in the located header row.

Labels are matched exactly against trimmed header cells; the first occurrence
wins. Unmatched optional keys stay ABSENT. The required keys (empId, date) are
re-resolved here independently of the header locator and must agree.
"""

__all__ = [
    "MissingColumnsError",
    "map_columns",
    "resolve_labels",
]


class MissingColumnsError(Exception):
    """Raised when a required semantic column is absent from the header."""

    def __init__(self, missing: Sequence[SemanticKey]) -> None:
        self.missing = [k.value for k in missing]
        super().__init__(f"Critical columns missing: {', '.join(self.missing)}")


def resolve_labels(overrides: Mapping[str, str] | None = None) -> dict[SemanticKey, str]:
    """Default header labels with optional per-key overrides (camelCase keys)."""
    labels = dict(DEFAULT_LABELS)
    if overrides:
        for key, label in overrides.items():
            labels[SemanticKey(key)] = label
    return labels


def map_columns(
    header_row: Sequence[Any],
    labels: Mapping[SemanticKey, str] | None = None,
) -> ColumnMap:
    labels = labels or DEFAULT_LABELS
    cells = normalize_header_cells(header_row)
    positions: dict[SemanticKey, int] = {}
    for key in SemanticKey:
        label = labels[key]
        positions[key] = cells.index(label) if label in cells else ABSENT
    column_map = ColumnMap.from_positions(positions)

    missing = column_map.missing_required()
    if missing:
        raise MissingColumnsError(missing)
    return column_map
