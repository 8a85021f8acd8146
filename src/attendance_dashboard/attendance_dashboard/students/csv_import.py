"""Roster CSV import.

Two column orders are accepted, ``email,name,hour`` and ``name,email,hour``;
the order is picked per row by checking which of the first two columns holds
an ``@``. A header row is optional and recognised by keyword.
"""
from __future__ import annotations

import csv
import io

from ..core.constants import DEFAULT_HOUR

HEADER_KEYWORDS = ("email", "name", "hour")


def _looks_like_header(row: list[str]) -> bool:
    line = ",".join(row).lower()
    return any(keyword in line for keyword in HEADER_KEYWORDS)


def parse_roster_csv(text: str) -> list[dict[str, str]]:
    rows = [[cell.strip() for cell in row] for row in csv.reader(io.StringIO(text))]
    rows = [row for row in rows if any(row)]
    if not rows:
        return []

    if _looks_like_header(rows[0]):
        rows = rows[1:]

    records: list[dict[str, str]] = []
    for row in rows:
        cells = row + [""] * (3 - len(row))
        if "@" in cells[0]:
            email, name = cells[0], cells[1]
        else:
            name, email = cells[0], cells[1]

        if not email or not name:
            continue
        records.append({"email": email, "name": name, "hour": cells[2] or DEFAULT_HOUR})

    return records
