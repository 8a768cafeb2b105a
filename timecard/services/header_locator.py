from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..models.column_map import DEFAULT_LABELS, SemanticKey

"""Header row locator.

Exports often start with title/banner rows ("Total Time Card", company name,
period...). The real header is the first row, within a bounded window at the
top of the sheet, whose trimmed cells contain both the employee id label and
the date label.
"""

__all__ = [
    "HEADER_SCAN_ROWS",
    "HeaderNotFoundError",
    "locate_header_row",
    "require_header_row",
    "normalize_header_cells",
]

logger = logging.getLogger(__name__)

# Only rows 0..19 are scanned
HEADER_SCAN_ROWS = 20


class HeaderNotFoundError(Exception):
    """Raised when no header row is found inside the scan window."""


def normalize_header_cells(row: Sequence[Any]) -> list[str]:
    """Stringify and trim every cell of a header candidate."""
    return ["" if cell is None else str(cell).strip() for cell in row]


def locate_header_row(
    grid: Sequence[Sequence[Any]],
    scan_limit: int = HEADER_SCAN_ROWS,
    emp_id_label: str = DEFAULT_LABELS[SemanticKey.EMP_ID],
    date_label: str = DEFAULT_LABELS[SemanticKey.DATE],
) -> int | None:
    """Return the index of the first header row, or None if not found."""
    for i in range(min(len(grid), scan_limit)):
        cells = normalize_header_cells(grid[i] or [])
        if emp_id_label in cells and date_label in cells:
            logger.debug(f"header row located at index {i}")
            return i
    return None


def require_header_row(
    grid: Sequence[Sequence[Any]],
    scan_limit: int = HEADER_SCAN_ROWS,
    emp_id_label: str = DEFAULT_LABELS[SemanticKey.EMP_ID],
    date_label: str = DEFAULT_LABELS[SemanticKey.DATE],
) -> int:
    idx = locate_header_row(grid, scan_limit, emp_id_label, date_label)
    if idx is None:
        raise HeaderNotFoundError(
            f"Could not find a valid header row containing '{emp_id_label}' and "
            f"'{date_label}' within the first {scan_limit} rows. Please check the file format."
        )
    return idx
