"""
Shared pytest fixtures for the OurSpots test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Repository and API tests: in-memory SQLite through the real SQLAlchemy
  layer, with a controllable clock instead of wall time.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

# ---------------------------------------------------------------------------
# Environment must be in place before any ourspots module is imported
# ---------------------------------------------------------------------------
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production-123456")
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
for _name in (
    "LOGIN_MAX_ATTEMPTS", "LOGIN_BLOCK_HOURS",
    "GUESTBOOK_COOLDOWN_SECONDS", "GUESTBOOK_CACHE_EXPIRY_MINUTES",
    "GUESTBOOK_DAILY_LIMIT_PER_IP", "GUESTBOOK_DAILY_LIMIT_GLOBAL",
    "QUOTA_UTC_OFFSET_HOURS",
):
    os.environ.pop(_name, None)

from ourspots.infrastructure.clock import start_of_day
from ourspots.infrastructure.database.connection import init_database

ADMIN_PASSWORD = "test-admin-password"
KST = timezone(timedelta(hours=9))


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2026, 10, 18, 12, 0, 0, tzinfo=KST)

    @property
    def tz(self):
        return self._now.tzinfo

    def now(self) -> datetime:
        return self._now

    def start_of_today(self) -> datetime:
        return start_of_day(self._now)

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)

    def set(self, moment: datetime) -> None:
        self._now = moment


class RecordingAttemptRepo:
    """Attempt ledger stand-in that keeps appended records in a list."""

    def __init__(self, fail: bool = False):
        self.records = []
        self.fail = fail

    def append(self, record):
        if self.fail:
            raise RuntimeError("ledger unavailable")
        self.records.append(record)
        return record

    def find_by_ip(self, ip_address, limit=100):
        return [r for r in reversed(self.records) if r.ip_address == ip_address][:limit]


class StubTokenIssuer:
    def __init__(self, token="jwt-token-123"):
        self.token = token
        self.issued = 0

    def issue(self):
        self.issued += 1
        return self.token

    def verify(self, token):
        return token == self.token


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_factory():
    return init_database("sqlite://")


@pytest.fixture
def test_app(clock):
    """Fresh application on its own in-memory database and limiter state."""
    from ourspots.main import create_app
    return create_app(database_url="sqlite://", clock=clock)


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)


@pytest.fixture
def admin_headers():
    from ourspots.infrastructure.auth.jwt_handler import create_access_token
    return {"Authorization": f"Bearer {create_access_token()}"}
