# sweatbot/main.py
import asyncio
import logging

from aiogram import Bot, Dispatcher

from sweatbot.config import Settings
from sweatbot.database import Database
from sweatbot.database.repo import SqlReportRepository
from sweatbot.handlers import router as handlers_router
from sweatbot.services.commands import build_command_router
from sweatbot.utils.dt import TimeProvider
from sweatbot.utils.middleware import GroupOnlyMiddleware


def setup_logging(is_dev: bool) -> None:
    """
    Clean production logging:
    - app logs: INFO (or DEBUG in dev)
    - SQLAlchemy / aiogram internals: WARNING+
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "aiosqlite",
        "aiogram.event",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("sweatbot")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    repo = SqlReportRepository(db)
    commands = build_command_router(repo, TimeProvider(settings.timezone))

    bot = Bot(token=settings.bot_token)
    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["settings"] = settings
    dp.workflow_data["commands"] = commands

    # single configured audience
    dp.message.outer_middleware(GroupOnlyMiddleware(settings))

    dp.include_router(handlers_router)

    if settings.group_id is None:
        log.warning("GROUP_ID is not set: answering in every chat")
    log.info("Bot is running (timezone=%s)", settings.timezone)

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")

        try:
            await bot.session.close()
        except Exception:
            log.exception("Failed to close bot session")


if __name__ == "__main__":
    asyncio.run(main())
