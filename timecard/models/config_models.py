from __future__ import annotations

from dataclasses import dataclass, field

from .column_map import DEFAULT_LABELS, SemanticKey
from .view_state import SortDirection, SortKey

"""Config dataclasses for the time card analyzer.

These are the typed forms of config/timecard.yml produced by
timecard.config.loader; every field has a default so the tool also runs
without a config file.
"""

__all__ = [
    "IngestSettings",
    "ExportConfig",
    "AppConfig",
]


@dataclass(frozen=True)
class IngestSettings:
    """Knobs of the ingestion pipeline."""
    header_scan_rows: int = 20  # header search window (rows 0..19)
    hours_per_day: float = 8.0  # equivalent_days divisor
    unknown_label: str = "Unknown"  # name / dept placeholder when unmapped
    labels: dict[SemanticKey, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))


@dataclass(frozen=True)
class ExportConfig:
    path: str = "Attendance_Analysis.xlsx"
    format: str = "xlsx"  # xlsx | csv


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    ingest: IngestSettings = field(default_factory=IngestSettings)
    export: ExportConfig = field(default_factory=ExportConfig)
    default_sort_key: SortKey = SortKey.EMP_ID
    default_sort_direction: SortDirection = SortDirection.ASC
