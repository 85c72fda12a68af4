# sweatbot/utils/reply.py
from __future__ import annotations

import asyncio
import logging
import random

from aiogram.types import Message
from aiogram.utils.chat_action import ChatActionSender

from sweatbot.config.settings import Settings

log = logging.getLogger(__name__)


def pick_delay_ms(settings: Settings, rng: random.Random | None = None) -> int:
    lo = settings.reply_delay_min_ms
    hi = settings.reply_delay_max_ms
    if hi <= lo:
        return lo
    return (rng or random).randint(lo, hi)


async def reply_humanized(message: Message, text: str, settings: Settings, **kwargs) -> None:
    """
    Answer in the same chat after the configured reply delay.
    Shows "typing..." during the delay when SHOW_TYPING is on.
    """
    delay_ms = pick_delay_ms(settings)

    if delay_ms > 0:
        log.debug("Delaying reply by %dms", delay_ms)
        if settings.show_typing:
            async with ChatActionSender.typing(bot=message.bot, chat_id=message.chat.id):
                await asyncio.sleep(delay_ms / 1000)
        else:
            await asyncio.sleep(delay_ms / 1000)

    await message.answer(text, **kwargs)
