# sweatbot/services/leaderboard.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from sweatbot.database.repo.base import Report, ReportRepository
from sweatbot.utils.dates import days_between, format_day
from sweatbot.utils.dt import Clock

TITLE = "30 Days of Sweat Challenge – Day {day} ({date})"
FOOTER = "Yang udah keringetan langsung update/posting aja nanti dimasukkin klasemen 💪\n\nSemangat🔥"


@dataclass(frozen=True, slots=True)
class LeaderRow:
    rank: int
    name: str
    streak: int
    activity_count: int
    active: bool

    def render(self) -> str:
        if self.active:
            return f"{self.rank}. {self.name} - {self.streak} days streak 🔥"
        return f"{self.rank}. {self.name} - Day {self.activity_count} 💔"


@dataclass(frozen=True, slots=True)
class Leaderboard:
    day: int
    today: date
    active: list[LeaderRow] = field(default_factory=list)
    lost: list[LeaderRow] = field(default_factory=list)


def is_active(report: Report, now: datetime) -> bool:
    # reported today, or yesterday and can still report today
    return days_between(report.last_report_date, now) <= 1


def build_leaderboard(reports: list[Report], now: datetime) -> Leaderboard:
    active = [r for r in reports if is_active(r, now)]
    lost = [r for r in reports if not is_active(r, now)]

    # stable sorts: ties keep storage order
    active.sort(key=lambda r: r.streak, reverse=True)
    lost.sort(key=lambda r: r.streak, reverse=True)

    ranked = [(r, True) for r in active] + [(r, False) for r in lost]
    rows = [
        LeaderRow(
            rank=rank,
            name=r.display_name,
            streak=r.streak,
            activity_count=r.activity_count,
            active=ok,
        )
        for rank, (r, ok) in enumerate(ranked, start=1)
    ]

    return Leaderboard(
        day=max((r.activity_count for r in reports), default=0),
        today=now.date(),
        active=rows[: len(active)],
        lost=rows[len(active):],
    )


def render_leaderboard(board: Leaderboard) -> str:
    lines = [
        TITLE.format(day=board.day, date=format_day(board.today)),
        "",
        f"Recap day {board.day}:",
        f"{len(board.active)} peoples keep the streak 🔥",
        f"{len(board.lost)} lose the streak 💔",
        "",
        "Update klasemen sementara:",
    ]
    lines.extend(row.render() for row in board.active)
    lines.extend(row.render() for row in board.lost)
    lines.append("")
    lines.append(FOOTER)
    return "\n".join(lines)


class LeaderboardService:
    def __init__(self, repo: ReportRepository, clock: Clock) -> None:
        self.repo = repo
        self.clock = clock

    async def build(self) -> Leaderboard:
        reports = await self.repo.get_all_reports()
        return build_leaderboard(reports, self.clock.now())

    async def render(self) -> str:
        return render_leaderboard(await self.build())
