# sweatbot/database/session.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from sweatbot.database.base import Base

log = logging.getLogger(__name__)


def _apply_sqlite_pragmas(dbapi_connection) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.execute("PRAGMA busy_timeout=5000;")  # 5s
    cursor.close()


def _ensure_sqlite_dir(database_url: str) -> None:
    url = make_url(database_url)
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def _migrate_member_reports(conn: Connection) -> None:
    """
    Older databases predate activity_count and updated_at. Add whichever is
    missing; activity_count is backfilled from streak so activity_count >= streak
    holds for legacy rows.
    """
    columns = {c["name"] for c in inspect(conn).get_columns("member_reports")}

    if "activity_count" not in columns:
        log.info("Migrating member_reports: adding activity_count")
        conn.execute(text("ALTER TABLE member_reports ADD COLUMN activity_count INTEGER DEFAULT 0"))
        conn.execute(text("UPDATE member_reports SET activity_count = streak WHERE activity_count < streak"))

    if "updated_at" not in columns:
        log.info("Migrating member_reports: adding updated_at")
        conn.execute(text("ALTER TABLE member_reports ADD COLUMN updated_at DATETIME"))
        conn.execute(text("UPDATE member_reports SET updated_at = CURRENT_TIMESTAMP WHERE updated_at IS NULL"))


class Database:
    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        is_sqlite = database_url.startswith("sqlite")

        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,
            connect_args={"timeout": 30} if is_sqlite else {},
        )

        if is_sqlite:
            _ensure_sqlite_dir(database_url)

            @event.listens_for(self.engine.sync_engine, "connect")
            def _on_connect(dbapi_connection, _connection_record) -> None:  # type: ignore[no-redef]
                _apply_sqlite_pragmas(dbapi_connection)

        self.SessionLocal = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    async def init_models(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(_migrate_member_reports)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.SessionLocal() as s:
            yield s

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Session inside a single transaction: commits on success, rolls back
        and re-raises on error.
        """
        async with self.SessionLocal() as s:
            async with s.begin():
                yield s
