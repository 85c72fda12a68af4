from __future__ import annotations

from dataclasses import replace
from typing import AsyncContextManager

from sweatbot.database.repo.base import Report
from sweatbot.utils.locks import KeyedLock


class InMemoryReportRepository:
    """
    Dict-backed repository for tests and dry runs.

    Stores copies so callers mutating a returned Report never touch stored
    state without going through upsert_report().
    """

    def __init__(self, reports: list[Report] | None = None) -> None:
        self._reports: dict[str, Report] = {}
        self._locks = KeyedLock()
        for r in reports or []:
            self._reports[r.member_id] = replace(r)

    def __len__(self) -> int:
        return len(self._reports)

    async def get_report(self, member_id: str) -> Report | None:
        r = self._reports.get(member_id)
        return replace(r) if r else None

    async def upsert_report(self, report: Report) -> None:
        self._reports[report.member_id] = replace(report)

    async def get_all_reports(self) -> list[Report]:
        return [replace(r) for r in self._reports.values()]

    def lock(self, member_id: str) -> AsyncContextManager[None]:
        return self._locks.hold(member_id)
