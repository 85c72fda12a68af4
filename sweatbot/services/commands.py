# sweatbot/services/commands.py
from __future__ import annotations

import enum

from sweatbot.database.repo.base import ReportRepository
from sweatbot.services.leaderboard import LeaderboardService
from sweatbot.services.report import ReportService
from sweatbot.utils.dt import Clock


class Command(enum.Enum):
    REPORT = "#lapor"
    LEADERBOARD = "#leaderboard"


def parse_command(text: str | None) -> Command | None:
    """
    Case-insensitive prefix match on the trimmed text.
    "#lapor hari ini lari" is a report; "lapor" (no #) is nothing.
    """
    normalized = (text or "").strip().casefold()
    if not normalized:
        return None
    for cmd in Command:
        if normalized.startswith(cmd.value):
            return cmd
    return None


class CommandRouter:
    def __init__(self, reports: ReportService, leaderboard: LeaderboardService) -> None:
        self.reports = reports
        self.leaderboard = leaderboard

    async def handle(self, member_id: str, display_name: str, text: str | None) -> str:
        """
        Returns the reply text, or "" when the message is ordinary chatter
        and nothing should be sent.
        """
        cmd = parse_command(text)

        if cmd is Command.REPORT:
            res = await self.reports.report(member_id, display_name)
            return res.message

        if cmd is Command.LEADERBOARD:
            return await self.leaderboard.render()

        return ""


def build_command_router(repo: ReportRepository, clock: Clock) -> CommandRouter:
    return CommandRouter(
        reports=ReportService(repo, clock),
        leaderboard=LeaderboardService(repo, clock),
    )
