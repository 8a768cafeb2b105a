from __future__ import annotations

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from timecard.config.loader import ConfigError, load_config, resolve_config_path
from timecard.excel.reader import GridReadError, read_grid
from timecard.excel.writer import ExportError, write_export
from timecard.logging.error_log import ErrorLogBuffer, ErrorRecord
from timecard.logging.init import enable_debug, log_summary, setup_logging
from timecard.models.column_map import SemanticKey
from timecard.models.config_models import AppConfig
from timecard.models.employee_summary import EmployeeSummary
from timecard.models.view_state import SortDirection, SortKey, ViewState
from timecard.services.header_locator import locate_header_row, normalize_header_cells
from timecard.services.pipeline import IngestionError, ingest_file
from timecard.services.progress import RowProgressTracker
from timecard.services.summary import render_summary_line
from timecard.services.view import apply_view, dashboard_stats, toggle_expanded

"""CLI entrypoint.

Flow:
- Load .env (overrides the environment) and the YAML config
- Ingest the first sheet of the given export file
- Print the filtered/sorted employee table (+ expanded employees' records)
- Optionally export the same view to .xlsx / .csv
- Emit one SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override existing variables."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Time card attendance analyzer")
    p.add_argument("file", help="Attendance export (.xlsx, .xls or .csv)")
    p.add_argument("--config", help="YAML config path (default: $TIMECARD_CONFIG or config/timecard.yml)")
    p.add_argument("--search", default="", help="Filter by employee id, name or department")
    p.add_argument("--issues-only", action="store_true", help="Only employees present with zero total hours")
    p.add_argument("--sort", choices=[k.value for k in SortKey], help="Sort key")
    p.add_argument("--desc", action="store_true", help="Sort descending")
    p.add_argument("--expand", action="append", default=[], metavar="EMP_ID", help="Show daily records of an employee")
    p.add_argument(
        "--export", nargs="?", const="", default=None, metavar="PATH",
        help="Export the current view (default path from config)",
    )
    p.add_argument("--format", choices=["xlsx", "csv"], help="Export format")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header & first rows then exit")
    return p.parse_args(argv)


def _build_view_state(args: argparse.Namespace, cfg: AppConfig) -> ViewState:
    state = ViewState(
        search_text=args.search,
        issues_only=args.issues_only,
        sort_key=SortKey(args.sort) if args.sort else cfg.default_sort_key,
        sort_direction=SortDirection.DESC if args.desc else cfg.default_sort_direction,
    )
    for emp_id in args.expand:
        state = toggle_expanded(state, emp_id)
    return state


def _inspect_data(path: Path, cfg: AppConfig) -> int:
    try:
        grid = read_grid(path)
    except GridReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={len(grid)}")
    idx = locate_header_row(
        grid,
        scan_limit=cfg.ingest.header_scan_rows,
        emp_id_label=cfg.ingest.labels[SemanticKey.EMP_ID],
        date_label=cfg.ingest.labels[SemanticKey.DATE],
    )
    if idx is None:
        print(f"  header: not found in first {cfg.ingest.header_scan_rows} rows")
        return EXIT_FATAL
    print(f"  header_row={idx} cols={normalize_header_cells(grid[idx])}")
    for row in grid[idx + 1: idx + 4]:
        print("    sample_row=", row)
    return EXIT_SUCCESS


def _print_table(view: list[EmployeeSummary], state: ViewState) -> None:
    print(f"{'ID':<12} {'Employee Name':<20} {'Department':<16} {'Days':>5} {'Hours':>9} {'Eqv.Days':>9}")
    for s in view:
        print(
            f"{s.emp_id:<12} {s.name:<20} {s.dept:<16} {s.days_present:>5} "
            f"{s.total_actual_hours:>9.2f} {s.equivalent_days:>9.2f}"
        )
        if s.emp_id in state.expanded:
            for rec in s.records:
                print(
                    f"    {rec.date:<12} in={rec.clock_in:<6} out={rec.clock_out:<6} "
                    f"{rec.actual_hours:>6.2f}h src={rec.source.value:<13} {rec.status}"
                )
    if not view:
        print("No employees found matching your search.")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] のとき sys.argv を読まない (テストから呼ぶ場合)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    try:
        config_path, required = resolve_config_path(args.config)
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"config: {config_path if config_path else 'built-in defaults'} (required={required})")

    path = Path(args.file)
    if args.inspect_data:
        return _inspect_data(path, cfg)

    logger.info(f"Processing file: {path}")
    start_time = datetime.now(UTC)
    try:
        result = ingest_file(path, cfg.ingest, progress_factory=RowProgressTracker)
    except IngestionError as e:
        logger.error(f"ingest: {e}")
        error_log = ErrorLogBuffer()
        error_log.append(ErrorRecord.create(path.name, e.row, e.error_type, str(e)))
        logger.info(f"error log written: {error_log.flush()}")
        return EXIT_FATAL

    state = _build_view_state(args, cfg)
    view = apply_view(result.summaries, state)
    stats = dashboard_stats(result.summaries)
    logger.info(
        f"employees={stats.total_employees} records={stats.total_records} "
        f"total_hours={stats.total_actual_hours:.0f} shown={len(view)}"
    )
    _print_table(view, state)

    if args.export is not None:
        export_path = Path(args.export or cfg.export.path)
        fmt = args.format or cfg.export.format
        try:
            written = write_export(export_path, view, fmt)
        except ExportError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL
        for p in written:
            logger.info(f"exported: {p}")

    elapsed = (datetime.now(UTC) - start_time).total_seconds()
    summary_line = render_summary_line(result, elapsed)
    # log_summary が "SUMMARY " を付与するため除去
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
