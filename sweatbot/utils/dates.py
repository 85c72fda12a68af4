from __future__ import annotations

from datetime import date, datetime, timezone


def as_utc(ts: datetime) -> datetime:
    # naive timestamps come back from SQLite and are always stored as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def local_day(ts: datetime, now: datetime) -> date:
    """
    Calendar day of `ts` on the same clock as `now`.
    """
    if now.tzinfo is None:
        return ts.date() if ts.tzinfo is None else ts.astimezone().date()
    return as_utc(ts).astimezone(now.tzinfo).date()


def days_between(ts: datetime, now: datetime) -> int:
    """Whole calendar days from `ts` to `now` (0 = same day, 1 = yesterday)."""
    return (now.date() - local_day(ts, now)).days


def format_day(d: date) -> str:
    return d.strftime("%d-%m-%Y")
