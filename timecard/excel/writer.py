from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.employee_summary import EmployeeSummary
from ..services.export import DETAIL_COLUMNS, SUMMARY_COLUMNS, build_detail_rows, build_summary_rows

"""Export renderer: employee summaries -> .xlsx workbook or .csv pair.

xlsx: one workbook with "Attendance Summary" and "Daily Details" sheets.
csv:  <stem>_summary.csv and <stem>_details.csv next to the requested path.
"""

__all__ = [
    "SUMMARY_SHEET",
    "DETAILS_SHEET",
    "ExportError",
    "write_export",
]

SUMMARY_SHEET = "Attendance Summary"
DETAILS_SHEET = "Daily Details"


class ExportError(Exception):
    """Raised when the export cannot be written."""


def write_export(path: Path, summaries: Sequence[EmployeeSummary], fmt: str = "xlsx") -> list[Path]:
    """Write Summary and Details output; returns the written file paths."""
    summary_df = pd.DataFrame(build_summary_rows(summaries), columns=SUMMARY_COLUMNS)
    details_df = pd.DataFrame(build_detail_rows(summaries), columns=DETAIL_COLUMNS)
    try:
        if fmt in ("csv", "xlsx"):
            path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "csv":
            summary_path = path.with_name(f"{path.stem}_summary.csv")
            details_path = path.with_name(f"{path.stem}_details.csv")
            summary_df.to_csv(summary_path, index=False, encoding="utf-8")
            details_df.to_csv(details_path, index=False, encoding="utf-8")
            return [summary_path, details_path]
        if fmt == "xlsx":
            xlsx_path = path.with_suffix(".xlsx")
            with pd.ExcelWriter(xlsx_path, engine="openpyxl") as writer:
                summary_df.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)
                details_df.to_excel(writer, sheet_name=DETAILS_SHEET, index=False)
            return [xlsx_path]
    except (OSError, ValueError) as e:
        # ValueError: openpyxl IllegalCharacterError (制御文字を含むセル)
        raise ExportError(f"failed to write export {path}: {e}") from e
    raise ExportError(f"unsupported export format: {fmt}")
