from __future__ import annotations

from typing import AsyncContextManager

from sqlalchemy import desc, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from sweatbot.database.models import MemberReport
from sweatbot.database.repo.base import Report
from sweatbot.database.session import Database
from sweatbot.utils.dates import as_utc
from sweatbot.utils.locks import KeyedLock


def _to_report(row: MemberReport) -> Report:
    return Report(
        member_id=row.member_id,
        display_name=row.display_name or "",
        streak=int(row.streak or 0),
        activity_count=int(row.activity_count or 0),
        last_report_date=as_utc(row.last_report_date),
    )


class SqlReportRepository:
    """
    SQLAlchemy-backed ReportRepository.

    Every call runs in its own session, so an upsert is committed before the
    caller leaves lock(). The per-member lock only serializes writers inside
    this process; run a single bot instance per database.
    """

    def __init__(self, db: Database, locks: KeyedLock | None = None) -> None:
        self.db = db
        self._locks = locks or KeyedLock()

    def lock(self, member_id: str) -> AsyncContextManager[None]:
        return self._locks.hold(member_id)

    async def get_report(self, member_id: str) -> Report | None:
        async with self.db.session() as session:
            row = await session.get(MemberReport, member_id)
            return _to_report(row) if row else None

    async def get_all_reports(self) -> list[Report]:
        async with self.db.session() as session:
            res = await session.execute(
                select(MemberReport).order_by(desc(MemberReport.streak), MemberReport.member_id)
            )
            return [_to_report(row) for row in res.scalars().all()]

    async def upsert_report(self, report: Report) -> None:
        insert = pg_insert if self.db.dialect == "postgresql" else sqlite_insert

        values = {
            "member_id": report.member_id,
            "display_name": report.display_name,
            "streak": report.streak,
            "activity_count": report.activity_count,
            "last_report_date": as_utc(report.last_report_date),
        }
        stmt = insert(MemberReport).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[MemberReport.member_id],
            set_={
                **{k: stmt.excluded[k] for k in values if k != "member_id"},
                "updated_at": func.now(),
            },
        )

        async with self.db.transaction() as session:
            await session.execute(stmt)
