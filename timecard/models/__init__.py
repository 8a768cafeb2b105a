"""Domain models for the time card attendance analyzer.

This package contains the frozen dataclasses and enums that flow between the
ingestion stages: column resolution, row classification, aggregation and the
query/view layer.
"""

from .attendance_record import AttendanceRecord, HoursSource
from .column_map import ABSENT, ColumnMap, SemanticKey
from .employee_summary import EmployeeSummary
from .error_record import ErrorRecord
from .ingestion_result import IngestionResult
from .view_state import SortDirection, SortKey, ViewState

__all__ = [
    # Column resolution
    "ABSENT",
    "ColumnMap",
    "SemanticKey",
    # Processing models
    "AttendanceRecord",
    "HoursSource",
    "EmployeeSummary",
    "IngestionResult",
    "ErrorRecord",
    # View state
    "SortDirection",
    "SortKey",
    "ViewState",
]
