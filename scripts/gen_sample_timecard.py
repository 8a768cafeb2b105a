#!/usr/bin/env python3
"""Synthetic "Total Time Card" export generator.

Generates an attendance export shaped like a ZKTeco iFace "Total Time Card"
sheet, for manual runs of the analyzer and for timing large inputs:
- Row 1-2: Title / period banner rows (ignored by the header locator)
- Row 3: Header row with the export's column labels
- Row 4+: One row per employee per day, with a mix of Regular(H) values,
  "HH:MM" Worked Hours, Total Hours only, absent days and "0:00" days
- A blank footer row at the end
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = [
    "Employee ID", "First Name", "Department", "Date",
    "Clock In", "Clock Out", "Total Hours", "Worked Hours", "Regular(H)",
]

DEPARTMENTS = ["Production", "Warehouse", "Office", "Sales", "Maintenance"]
FIRST_NAMES = ["Ana", "Ben", "Chen", "Dara", "Eli", "Farah", "Gus", "Hana", "Ivan", "Jo"]


def _hhmm(hours: float) -> str:
    total_minutes = int(round(hours * 60))
    return f"{total_minutes // 60}:{total_minutes % 60:02d}"


def generate_rows(employees: int, days: int, seed: int = 42) -> list[list[Any]]:
    """Generate data rows (no title / header rows).

    Day kinds (drawn per employee-day):
        regular     Regular(H) filled, Worked/Total Hours filled
        worked      Worked Hours only ("HH:MM")
        total_only  Total Hours only (absent, hours from Total Hours)
        zero        Worked Hours "0:00" (present with zero hours)
        absent      nothing filled
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2024-01-01", periods=days, freq="D")
    kinds = rng.choice(
        ["regular", "worked", "total_only", "zero", "absent"],
        size=(employees, days),
        p=[0.55, 0.2, 0.05, 0.05, 0.15],
    )
    rows: list[list[Any]] = []
    for e in range(employees):
        emp_id = f"{e + 1:04d}"
        name = FIRST_NAMES[e % len(FIRST_NAMES)]
        dept = DEPARTMENTS[e % len(DEPARTMENTS)]
        for d, day in enumerate(dates):
            kind = kinds[e, d]
            hours = float(np.round(rng.uniform(4.0, 9.5), 2))
            start_minutes = int(rng.integers(7 * 60, 9 * 60))
            clock_in = f"{start_minutes // 60:02d}:{start_minutes % 60:02d}"
            end_minutes = start_minutes + int(hours * 60)
            clock_out = f"{end_minutes // 60:02d}:{end_minutes % 60:02d}"
            row = [emp_id, name, dept, day.strftime("%Y-%m-%d"), "", "", "", "", ""]
            if kind == "regular":
                row[4:9] = [clock_in, clock_out, _hhmm(hours), _hhmm(hours), hours]
            elif kind == "worked":
                row[4:8] = [clock_in, clock_out, _hhmm(hours), _hhmm(hours)]
            elif kind == "total_only":
                row[4:7] = [clock_in, "", _hhmm(hours)]
            elif kind == "zero":
                row[4:8] = [clock_in, "", "0:00", "0:00"]
            rows.append(row)
    return rows


def create_export_file(
    output_path: Path,
    employees: int,
    days: int,
    title: str = "Total Time Card",
    seed: int = 42,
) -> int:
    """Write the export (.xlsx or .csv by suffix); returns the number of data rows."""
    data_rows = generate_rows(employees, days, seed)
    width = len(HEADER)
    sheet_data: list[list[Any]] = [
        [title] + [""] * (width - 1),
        [f"Period: {days} days from 2024-01-01"] + [""] * (width - 1),
        HEADER,
        *data_rows,
        [""] * width,
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(sheet_data)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, header=False, index=False)
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Total Time Card", header=False, index=False)
    return len(data_rows)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic Total Time Card export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sample.xlsx
  %(prog)s big.csv --employees 500 --days 31 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx or .csv path")
    parser.add_argument("--employees", type=int, default=25, help="Number of employees (default: 25)")
    parser.add_argument("--days", type=int, default=14, help="Number of days (default: 14)")
    parser.add_argument("--title", default="Total Time Card", help="Banner title row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.employees <= 0 or args.days <= 0:
        print("Error: --employees and --days must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".xlsx", ".csv"):
        print("Error: output must end with .xlsx or .csv", file=sys.stderr)
        return 1

    try:
        count = create_export_file(args.output, args.employees, args.days, args.title, args.seed)
    except OSError as e:
        print(f"Error generating export: {e}", file=sys.stderr)
        return 1
    print(f"Created {args.output}: {count:,} data rows ({args.employees} employees x {args.days} days)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
