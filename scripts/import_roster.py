"""Merge a roster CSV into the students document.

Usage: python scripts/import_roster.py roster.csv
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_dashboard.attendance_dashboard.container import build_container
from src.attendance_dashboard.attendance_dashboard.core.exceptions import DomainError
from src.attendance_dashboard.attendance_dashboard.main import load_settings
from src.attendance_dashboard.attendance_dashboard.students.csv_import import parse_roster_csv
from src.attendance_dashboard.attendance_dashboard.students.service import configure_collation


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("csv_file", type=Path)
    args = parser.parse_args()

    records = parse_roster_csv(args.csv_file.read_text(encoding="utf-8-sig"))
    if not records:
        raise SystemExit("No valid student data found in CSV (expected email, name and hour columns).")

    configure_collation()
    container = build_container(load_settings())
    try:
        summary = container.roster_service.merge_upsert(records)
    except DomainError as e:
        raise SystemExit(f"Import failed: {e}")

    print(
        f"OK: {summary.added} new, {summary.updated} updated, "
        f"{summary.kept} kept, {summary.total} students in roster"
    )


if __name__ == "__main__":
    main()
