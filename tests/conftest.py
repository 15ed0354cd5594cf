import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

# Must be set before app.config is imported anywhere.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="fleet-booking-"), "test.sqlite3"
)

NOW = datetime(2030, 1, 1, 8, 0, tzinfo=timezone.utc)

ADMIN_HEADERS = {"X-User-Id": "1", "X-User-Email": "admin@example.com", "X-User-Role": "ADMIN"}
USER_HEADERS = {"X-User-Id": "2", "X-User-Email": "user@example.com", "X-User-Role": "USER"}
OTHER_USER_HEADERS = {"X-User-Id": "3", "X-User-Email": "sam@example.com", "X-User-Role": "USER"}


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        self._now += delta


def hours_from_now(hours: float) -> datetime:
    return NOW + timedelta(hours=hours)


@pytest.fixture(autouse=True)
def setup_test_db():
    import asyncio

    from app.config import settings
    settings.api_key = ""

    from app.database import create_tables, drop_tables, async_session
    from app.seed import seed_data

    async def _setup():
        await drop_tables()
        await create_tables()
        async with async_session() as session:
            await seed_data(session)

    asyncio.run(_setup())


@pytest.fixture
def clock():
    from app.dependencies import get_clock
    from app.main import app

    fixed = FixedClock(NOW)
    app.dependency_overrides[get_clock] = lambda: fixed
    yield fixed
    app.dependency_overrides.pop(get_clock, None)
