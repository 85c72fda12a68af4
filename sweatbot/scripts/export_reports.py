# sweatbot/scripts/export_reports.py
from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from sweatbot.config.settings import DEFAULT_DATABASE_URL
from sweatbot.database.repo import SqlReportRepository
from sweatbot.database.session import Database
from sweatbot.utils.csv_io import reports_to_csv

DEFAULT_PATH = Path("./data/reports.csv")


async def main(path: Path, database_url: str) -> None:
    db = Database(database_url)
    await db.init_models()

    try:
        reports = await SqlReportRepository(db).get_all_reports()
    finally:
        await db.close()

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as fp:
        n = reports_to_csv(reports, fp)

    print(f"✅ Exported {n} reports to {path}")


if __name__ == "__main__":
    load_dotenv()
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PATH
    asyncio.run(main(target, os.environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL))
