# sweatbot/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/sweatbot.db"
DEFAULT_TIMEZONE = "Asia/Jakarta"

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def _require(env: Mapping[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    value = _to_int(raw, key)
    if value < 0:
        raise RuntimeError(f"{key} must not be negative: {value}")
    return value


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise RuntimeError(f"Invalid boolean for {key}: {raw!r}")


def _validate_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(f"Unknown TIMEZONE: {name!r}") from e
    return name


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str

    # --- optional ---
    database_url: str = DEFAULT_DATABASE_URL

    # --- telegram targets ---
    group_id: Optional[int] = None

    # --- time ---
    timezone: str = DEFAULT_TIMEZONE

    # --- reply humanization ---
    reply_delay_min_ms: int = 0
    reply_delay_max_ms: int = 0  # <= min means a fixed delay of min
    show_typing: bool = False

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required or malformed fields.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        bot_token = _require(env, "BOT_TOKEN")

        database_url = (env.get("DATABASE_URL") or DEFAULT_DATABASE_URL).strip()

        group_id_raw = (env.get("GROUP_ID") or "").strip()
        group_id = _to_int(group_id_raw, "GROUP_ID") if group_id_raw else None

        timezone = _validate_timezone((env.get("TIMEZONE") or "").strip() or DEFAULT_TIMEZONE)
        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            database_url=database_url,
            group_id=group_id,
            timezone=timezone,
            reply_delay_min_ms=_get_int(env, "REPLY_DELAY_MIN_MS", 0),
            reply_delay_max_ms=_get_int(env, "REPLY_DELAY_MAX_MS", 0),
            show_typing=_get_bool(env, "SHOW_TYPING", False),
            environment=environment,
        )
