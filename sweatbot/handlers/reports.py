# sweatbot/handlers/reports.py
from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.types import Message, User as TgUser

from sweatbot.config.settings import Settings
from sweatbot.services.commands import CommandRouter
from sweatbot.utils.reply import reply_humanized

log = logging.getLogger(__name__)

router = Router(name="reports")


def _display_name(tg: TgUser) -> str:
    name = " ".join([p for p in [tg.first_name, tg.last_name] if p]).strip()
    if name:
        return name
    if tg.username:
        return f"@{tg.username}"
    return "Unknown"


@router.message(F.text | F.caption)
async def on_message(message: Message, settings: Settings, commands: CommandRouter) -> None:
    tg = message.from_user
    if tg is None:
        return

    text = message.text or message.caption or ""
    member_id = str(tg.id)
    name = _display_name(tg)

    try:
        reply = await commands.handle(member_id, name, text)
    except Exception:
        # no reply on storage failures; keep polling alive
        log.exception("Failed to handle message from %s (%s)", name, member_id)
        return

    if not reply:
        return

    log.info("Replying to %s (%s): %r", name, member_id, text[:40])
    await reply_humanized(message, reply, settings)
