# sweatbot/handlers/common.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

router = Router(name="common")

HELP_TEXT = (
    "💪 30 Days of Sweat Challenge\n\n"
    "#lapor — laporkan olahraga hari ini (sekali sehari)\n"
    "#leaderboard — lihat klasemen sementara"
)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await message.answer(HELP_TEXT)


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT)
