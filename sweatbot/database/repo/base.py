from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import AsyncContextManager, Protocol


@dataclass(slots=True)
class Report:
    """
    Per-member sweat ledger entry.

    Created by the member's first accepted report and updated in place on
    every accepted report after that. `activity_count >= streak >= 1`.
    """

    member_id: str
    display_name: str
    streak: int
    activity_count: int
    last_report_date: datetime


class ReportRepository(Protocol):
    """
    Storage capability the report and leaderboard services depend on.

    `lock(member_id)` serializes read-modify-write cycles for one member;
    upserts done while holding it must be durable before it is released.
    """

    async def get_report(self, member_id: str) -> Report | None: ...

    async def upsert_report(self, report: Report) -> None: ...

    async def get_all_reports(self) -> list[Report]: ...

    def lock(self, member_id: str) -> AsyncContextManager[None]: ...
