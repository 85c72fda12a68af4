# sweatbot/utils/middleware.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message

from sweatbot.config.settings import Settings


class GroupOnlyMiddleware(BaseMiddleware):
    """
    Drops messages that are not meant for the bot: anything outside the
    configured GROUP_ID (when set), and anything sent by a bot.

    Register as an outer middleware on `dp.message`.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def __call__(
        self,
        handler: Callable[[Message, Dict[str, Any]], Awaitable[Any]],
        event: Message,
        data: Dict[str, Any],
    ) -> Any:
        gid = self.settings.group_id
        if gid is not None and int(event.chat.id) != int(gid):
            return None

        if event.from_user is None or event.from_user.is_bot:
            return None

        return await handler(event, data)
