from __future__ import annotations

import csv
from datetime import datetime
from typing import Iterable, TextIO

from sweatbot.database.repo.base import Report
from sweatbot.utils.dates import as_utc

FIELDS = ("member_id", "display_name", "streak", "activity_count", "last_report_date")

# headers written by the previous bot's export script
ALIASES = {"user_id": "member_id", "name": "display_name"}


def reports_to_csv(reports: Iterable[Report], fp: TextIO) -> int:
    """
    Writes a header plus one row per report, highest activity_count first.
    Returns the number of rows written.
    """
    w = csv.writer(fp)
    w.writerow(FIELDS)

    n = 0
    for r in sorted(reports, key=lambda r: r.activity_count, reverse=True):
        w.writerow([
            r.member_id,
            r.display_name,
            r.streak,
            r.activity_count,
            as_utc(r.last_report_date).isoformat(),
        ])
        n += 1
    return n


def _parse_row(row: dict[str, str], line: int) -> Report:
    try:
        member_id = (row.get("member_id") or "").strip()
        if not member_id:
            raise ValueError("empty member_id")

        streak = int(row["streak"])
        activity_count = int(row.get("activity_count") or 0)
        # legacy exports had no activity_count column
        activity_count = max(activity_count, streak)
        if streak < 1:
            raise ValueError(f"streak must be >= 1, got {streak}")

        last_report_date = as_utc(datetime.fromisoformat(row["last_report_date"].strip()))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid report on line {line}: {e}") from e

    return Report(
        member_id=member_id,
        display_name=(row.get("display_name") or "").strip(),
        streak=streak,
        activity_count=activity_count,
        last_report_date=last_report_date,
    )


def reports_from_csv(fp: TextIO) -> list[Report]:
    reader = csv.DictReader(fp)
    if reader.fieldnames:
        reader.fieldnames = [ALIASES.get(f.strip(), f.strip()) for f in reader.fieldnames]

    missing = {"member_id", "streak", "last_report_date"} - set(reader.fieldnames or [])
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(sorted(missing))}")

    # header is line 1
    return [_parse_row(row, line) for line, row in enumerate(reader, start=2)]
