from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from ..excel.reader import GridReadError, read_grid
from ..models.attendance_record import AttendanceRecord
from ..models.column_map import SemanticKey
from ..models.config_models import IngestSettings
from ..models.ingestion_result import IngestionResult
from .aggregator import aggregate
from .column_mapper import MissingColumnsError, map_columns
from .header_locator import HeaderNotFoundError, locate_header_row, require_header_row
from .row_classifier import classify_rows

"""Ingestion pipeline orchestration.

raw grid -> header location -> column mapping -> row classification ->
per-employee aggregation. Each stage produces a new immutable structure; the
pipeline holds no state between runs, so ingesting the same grid twice gives
equal results.

Any failure aborts the whole ingestion: no partial result is returned.
"""

__all__ = [
    "IngestionError",
    "ingest",
    "ingest_file",
    "error_type_of",
]

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Single fatal error surfaced to the caller for a failed ingestion."""

    def __init__(self, message: str, error_type: str = "UNEXPECTED", row: int = -1) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.row = row


def error_type_of(exc: Exception) -> str:
    """UPPER_SNAKE error classification used by the error log."""
    if isinstance(exc, HeaderNotFoundError):
        return "HEADER_NOT_FOUND"
    if isinstance(exc, MissingColumnsError):
        return "MISSING_COLUMNS"
    if isinstance(exc, GridReadError):
        return "READ_ERROR"
    return "UNEXPECTED"


def ingest(
    grid: Sequence[Sequence[Any]],
    settings: IngestSettings | None = None,
    progress: Callable[[], None] | None = None,
) -> IngestionResult:
    """Run the ingestion pipeline over an in-memory raw grid.

    Args:
        grid: Raw grid (rows of untyped cells) from the spreadsheet reader
        settings: Pipeline knobs (scan window, hours per day, labels)
        progress: Optional hook called once per data row

    Returns:
        IngestionResult with summaries in first-seen order

    Raises:
        IngestionError: header not found, required column missing or any
            unexpected failure while processing rows
    """
    settings = settings or IngestSettings()
    header_row_index = -1
    try:
        header_row_index = require_header_row(
            grid,
            scan_limit=settings.header_scan_rows,
            emp_id_label=settings.labels[SemanticKey.EMP_ID],
            date_label=settings.labels[SemanticKey.DATE],
        )
        column_map = map_columns(grid[header_row_index], settings.labels)
        logger.debug(f"column map: {column_map.as_dict()}")

        records: list[AttendanceRecord] = []
        skipped = 0
        for record in classify_rows(
            grid, header_row_index, column_map, settings.unknown_label, on_row=progress
        ):
            if record is None:
                skipped += 1
            else:
                records.append(record)

        summaries = aggregate(records, settings.hours_per_day)
    except (HeaderNotFoundError, MissingColumnsError) as e:
        raise IngestionError(str(e), error_type_of(e), header_row_index) from e
    except Exception as e:
        raise IngestionError(f"Failed to parse file: {e}", "UNEXPECTED") from e

    logger.debug(
        f"ingested header_row={header_row_index} records={len(records)} "
        f"employees={len(summaries)} skipped_rows={skipped}"
    )
    return IngestionResult(
        summaries=summaries,
        records=tuple(records),
        header_row_index=header_row_index,
        column_map=column_map,
        skipped_rows=skipped,
    )


def ingest_file(
    path: Path,
    settings: IngestSettings | None = None,
    progress_factory: Callable[[int], Any] | None = None,
) -> IngestionResult:
    """Read the first sheet of ``path`` and ingest it.

    progress_factory, when given, is called with the number of data rows below the
    header and must return a context manager exposing ``advance()`` (see RowProgressTracker).
    """
    try:
        grid = read_grid(path)
    except GridReadError as e:
        raise IngestionError(str(e), "READ_ERROR") from e
    logger.debug(f"read {len(grid)} rows from {path.name}")

    if progress_factory is None:
        return ingest(grid, settings)
    settings = settings or IngestSettings()
    header_row_index = locate_header_row(
        grid,
        scan_limit=settings.header_scan_rows,
        emp_id_label=settings.labels[SemanticKey.EMP_ID],
        date_label=settings.labels[SemanticKey.DATE],
    )
    # バーの総数はヘッダー以降のデータ行数 (未検出なら ingest 側で失敗する)
    total = len(grid) - header_row_index - 1 if header_row_index is not None else 0
    with progress_factory(total) as tracker:
        return ingest(grid, settings, progress=tracker.advance)
