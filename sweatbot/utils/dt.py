from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...


@dataclass(frozen=True, slots=True)
class TimeProvider:
    timezone: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        return datetime.now(tz=self.tz)


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Always returns the same instant (tests)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
