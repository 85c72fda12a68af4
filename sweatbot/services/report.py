# sweatbot/services/report.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from sweatbot.database.repo.base import Report, ReportRepository
from sweatbot.utils.dates import days_between
from sweatbot.utils.dt import Clock

log = logging.getLogger(__name__)

ACCEPTED_TEMPLATE = "Laporan diterima, {name} sudah berkeringat {count} hari. Lanjutkan 🔥"
REJECTED_TEMPLATE = "{name} sudah laporan hari ini, ayo jangan curang! 😉"


@dataclass(frozen=True, slots=True)
class ReportResult:
    accepted: bool
    report: Report
    message: str


class ReportService:
    """
    Daily sweat report accounting.

    One accepted report per member per local calendar day:
    - first report ever        -> streak 1, count 1
    - already reported today   -> rejected, nothing written
    - last report yesterday    -> streak + 1, count + 1
    - last report before that  -> streak back to 1, count + 1
    """

    def __init__(self, repo: ReportRepository, clock: Clock) -> None:
        self.repo = repo
        self.clock = clock

    async def report(self, member_id: str, display_name: str) -> ReportResult:
        async with self.repo.lock(member_id):
            now = self.clock.now()
            current = await self.repo.get_report(member_id)

            if current is None:
                current = Report(
                    member_id=member_id,
                    display_name=display_name,
                    streak=1,
                    activity_count=1,
                    last_report_date=now,
                )
            else:
                gap = days_between(current.last_report_date, now)

                # <= 0 also covers a stored date ahead of the clock (tz change)
                if gap <= 0:
                    log.debug("Rejected duplicate report from %s", member_id)
                    return ReportResult(
                        accepted=False,
                        report=current,
                        message=REJECTED_TEMPLATE.format(name=display_name),
                    )

                current.streak = current.streak + 1 if gap == 1 else 1
                current.activity_count += 1
                current.display_name = display_name
                current.last_report_date = now

            await self.repo.upsert_report(current)

        log.info(
            "Report accepted: member=%s streak=%s count=%s",
            member_id,
            current.streak,
            current.activity_count,
        )
        return ReportResult(
            accepted=True,
            report=current,
            message=ACCEPTED_TEMPLATE.format(name=display_name, count=current.activity_count),
        )
