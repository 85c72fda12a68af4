# sweatbot/scripts/import_reports.py
from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from sweatbot.config.settings import DEFAULT_DATABASE_URL
from sweatbot.database.repo import SqlReportRepository
from sweatbot.database.session import Database
from sweatbot.utils.csv_io import reports_from_csv

DEFAULT_PATH = Path("./data/reports.csv")


async def main(path: Path, database_url: str) -> None:
    if not path.exists():
        raise SystemExit(f"Error: CSV file not found at {path}")

    # parse everything first: a bad line aborts before anything is written
    with path.open(newline="", encoding="utf-8") as fp:
        reports = reports_from_csv(fp)

    db = Database(database_url)
    await db.init_models()

    try:
        repo = SqlReportRepository(db)
        for r in reports:
            await repo.upsert_report(r)
    finally:
        await db.close()

    print(f"✅ Imported {len(reports)} reports from {path}")


if __name__ == "__main__":
    load_dotenv()
    source = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PATH
    asyncio.run(main(source, os.environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL))
