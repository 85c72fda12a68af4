import pytest

from sweatbot.database.repo import InMemoryReportRepository
from sweatbot.services.commands import Command, build_command_router, parse_command
from tests.factories import make_report


class SpyRepository(InMemoryReportRepository):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[str] = []

    async def get_report(self, member_id):
        self.calls.append("get_report")
        return await super().get_report(member_id)

    async def upsert_report(self, report):
        self.calls.append("upsert_report")
        await super().upsert_report(report)

    async def get_all_reports(self):
        self.calls.append("get_all_reports")
        return await super().get_all_reports()


@pytest.fixture
def spy() -> SpyRepository:
    return SpyRepository()


@pytest.fixture
def commands(spy, clock):
    return build_command_router(spy, clock)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#lapor", Command.REPORT),
        ("#LAPOR", Command.REPORT),
        ("#LaPor", Command.REPORT),
        ("  #lapor  ", Command.REPORT),
        ("\n#lapor\n", Command.REPORT),
        ("\t#lapor", Command.REPORT),
        ("#lapor hari ini olahraga lari", Command.REPORT),
        ("#leaderboard", Command.LEADERBOARD),
        ("#LeaderBoard", Command.LEADERBOARD),
        ("  #LEADERBOARD please", Command.LEADERBOARD),
        ("", None),
        ("   ", None),
        (None, None),
        ("hello", None),
        ("#help", None),
        ("#invalid", None),
        ("lapor", None),
        ("leaderboard", None),
        ("mau #lapor", None),
    ],
)
def test_parse_command(text, expected):
    assert parse_command(text) is expected


async def test_lapor_routes_to_report(commands, spy):
    msg = await commands.handle("user123", "TestUser", "#lapor")

    assert msg == "Laporan diterima, TestUser sudah berkeringat 1 hari. Lanjutkan 🔥"
    stored = await spy.get_report("user123")
    assert stored.display_name == "TestUser"


async def test_lapor_with_trailing_text(commands):
    msg = await commands.handle("user1", "User", "#Lapor hari ini lari 5km")

    assert msg.startswith("Laporan diterima, User")


async def test_leaderboard_routes_to_leaderboard(spy, clock):
    await spy.upsert_report(make_report("user1", name="Alice", streak=5, activity_count=5))
    commands = build_command_router(spy, clock)

    msg = await commands.handle("user2", "User", "  #LEADERBOARD ")

    assert msg.startswith("30 Days of Sweat Challenge – Day 5")
    assert "1. Alice - 5 days streak 🔥" in msg


@pytest.mark.parametrize("text", ["", "hello", "random message", "#help", "lapor", "leaderboard"])
async def test_unrecognized_text_is_ignored_without_storage_calls(commands, spy, text):
    assert await commands.handle("user1", "User", text) == ""
    assert spy.calls == []


async def test_router_returns_rejection_message(commands):
    await commands.handle("user1", "User", "#lapor")

    msg = await commands.handle("user1", "User", "#lapor lagi")

    assert msg == "User sudah laporan hari ini, ayo jangan curang! 😉"
