from __future__ import annotations

import pytest

from sweatbot.database.repo import InMemoryReportRepository
from sweatbot.utils.dt import FixedClock
from tests.factories import NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def repo() -> InMemoryReportRepository:
    return InMemoryReportRepository()
