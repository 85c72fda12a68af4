import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from sweatbot.database.repo import InMemoryReportRepository
from sweatbot.services.report import ReportService
from sweatbot.utils.dt import FixedClock
from tests.factories import JAKARTA, NOW, BrokenStorage, FailingRepository, days_ago, make_report


async def test_first_report_creates_record(repo, clock):
    service = ReportService(repo, clock)

    res = await service.report("u1", "Alice")

    assert res.accepted is True
    assert res.message == "Laporan diterima, Alice sudah berkeringat 1 hari. Lanjutkan 🔥"

    stored = await repo.get_report("u1")
    assert stored is not None
    assert stored.streak == 1
    assert stored.activity_count == 1
    assert stored.display_name == "Alice"
    assert stored.last_report_date == NOW


async def test_second_report_same_day_is_rejected(repo, clock):
    await repo.upsert_report(make_report("u1", name="Alice", streak=3, activity_count=4, last=days_ago(0, hour=6)))
    service = ReportService(repo, clock)

    res = await service.report("u1", "Alice B")

    assert res.accepted is False
    assert res.message == "Alice B sudah laporan hari ini, ayo jangan curang! 😉"

    stored = await repo.get_report("u1")
    assert (stored.streak, stored.activity_count) == (3, 4)
    assert stored.display_name == "Alice"  # no mutation on rejection


async def test_report_after_yesterday_extends_streak(repo, clock):
    await repo.upsert_report(make_report("u1", streak=5, activity_count=10, last=days_ago(1)))

    res = await ReportService(repo, clock).report("u1", "Bob")

    stored = await repo.get_report("u1")
    assert res.accepted is True
    assert (stored.streak, stored.activity_count) == (6, 11)
    assert stored.display_name == "Bob"
    assert res.message == "Laporan diterima, Bob sudah berkeringat 11 hari. Lanjutkan 🔥"


async def test_report_after_gap_resets_streak_but_keeps_count(repo, clock):
    await repo.upsert_report(make_report("u1", streak=36, activity_count=36, last=days_ago(30)))

    await ReportService(repo, clock).report("u1", "Carol")

    stored = await repo.get_report("u1")
    assert (stored.streak, stored.activity_count) == (1, 37)
    assert stored.last_report_date == NOW


async def test_two_day_gap_resets_streak(repo, clock):
    await repo.upsert_report(make_report("u1", streak=4, activity_count=4, last=days_ago(2, hour=23)))

    await ReportService(repo, clock).report("u1", "Dan")

    stored = await repo.get_report("u1")
    assert (stored.streak, stored.activity_count) == (1, 5)


async def test_day_boundary_is_exact_in_local_time(repo):
    # 23:59 yesterday Jakarta vs 00:01 today Jakarta
    last = datetime(2026, 2, 5, 23, 59, tzinfo=JAKARTA)
    now = datetime(2026, 2, 6, 0, 1, tzinfo=JAKARTA)
    await repo.upsert_report(make_report("u1", streak=2, activity_count=2, last=last))

    res = await ReportService(repo, FixedClock(now)).report("u1", "Eve")

    assert res.accepted is True
    assert res.report.streak == 3


async def test_stored_utc_timestamp_compared_on_local_calendar(repo):
    # 2026-02-05 18:00 UTC is already 2026-02-06 01:00 in Jakarta -> same day
    last = datetime(2026, 2, 5, 18, 0, tzinfo=timezone.utc)
    await repo.upsert_report(make_report("u1", streak=2, activity_count=2, last=last))

    res = await ReportService(repo, FixedClock(NOW)).report("u1", "Fay")

    assert res.accepted is False


async def test_activity_count_never_below_streak(repo):
    service_days = [0, 1, 2, 5, 6, 6, 7, 20, 21, 22]
    start = NOW - timedelta(days=30)

    for offset in service_days:
        clock = FixedClock(start + timedelta(days=offset))
        await ReportService(repo, clock).report("u1", "Gus")
        stored = await repo.get_report("u1")
        assert stored.activity_count >= stored.streak >= 1

    stored = await repo.get_report("u1")
    assert stored.activity_count == 9  # one duplicate day rejected
    assert stored.streak == 3


async def test_concurrent_reports_for_same_member_accept_once(clock):
    repo = InMemoryReportRepository()
    service = ReportService(repo, clock)

    results = await asyncio.gather(*(service.report("u1", "Hana") for _ in range(5)))

    assert sum(r.accepted for r in results) == 1
    stored = await repo.get_report("u1")
    assert (stored.streak, stored.activity_count) == (1, 1)


async def test_different_members_are_independent(repo, clock):
    service = ReportService(repo, clock)

    a, b = await asyncio.gather(service.report("a", "A"), service.report("b", "B"))

    assert a.accepted and b.accepted
    assert len(repo) == 2


async def test_write_failure_propagates_and_keeps_stored_record(clock):
    repo = FailingRepository(
        [make_report("u1", name="Ika", streak=5, activity_count=10, last=days_ago(1))],
        fail_upsert=True,
    )

    with pytest.raises(BrokenStorage):
        await ReportService(repo, clock).report("u1", "Ika Baru")

    stored = await repo.get_report("u1")
    assert (stored.streak, stored.activity_count) == (5, 10)
    assert stored.display_name == "Ika"
    assert stored.last_report_date == days_ago(1)


async def test_write_failure_on_first_report_creates_nothing(clock):
    repo = FailingRepository(fail_upsert=True)

    with pytest.raises(BrokenStorage):
        await ReportService(repo, clock).report("u9", "Joko")

    assert await repo.get_report("u9") is None
