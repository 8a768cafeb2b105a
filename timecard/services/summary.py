from __future__ import annotations

from ..models.ingestion_result import IngestionResult

"""Summary line rendering for the SUMMARY log output.

Format:
SUMMARY employees={n} records={m} present_days={p} total_hours={h:.2f}
skipped_rows={s} header_row={r} elapsed_sec={e}
"""


def _format_elapsed(elapsed_seconds: float) -> str:
    if elapsed_seconds == 0:
        return "0"
    if elapsed_seconds == int(elapsed_seconds):
        return str(int(elapsed_seconds))
    if elapsed_seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{elapsed_seconds:.6f}".rstrip("0").rstrip(".")
    return f"{elapsed_seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: IngestionResult, elapsed_seconds: float) -> str:
    """Render the SUMMARY line for one ingestion.

    Examples:
        >>> from timecard.models.column_map import ColumnMap
        >>> result = IngestionResult(
        ...     summaries=(), records=(), header_row_index=2,
        ...     column_map=ColumnMap(emp_id=0, date=1), skipped_rows=1,
        ... )
        >>> render_summary_line(result, 2.0)
        'SUMMARY employees=0 records=0 present_days=0 total_hours=0.00 skipped_rows=1 header_row=2 elapsed_sec=2'
    """
    return (
        f"SUMMARY employees={len(result.summaries)} "
        f"records={result.total_records} "
        f"present_days={result.present_days} "
        f"total_hours={result.total_actual_hours:.2f} "
        f"skipped_rows={result.skipped_rows} "
        f"header_row={result.header_row_index} "
        f"elapsed_sec={_format_elapsed(elapsed_seconds)}"
    )
