"""Tests for QuotaChecker -- daily per-IP and global caps."""
from datetime import datetime, timedelta

import pytest

from ourspots.application.quota_checker import QuotaChecker
from ourspots.domain.enums import LimitScope
from ourspots.domain.errors import InternalError, TooManyAttemptsError
from tests.conftest import FakeClock


class StubCounter:
    def __init__(self, ip_count=0, global_count=0, fail=False):
        self.ip_count = ip_count
        self.global_count = global_count
        self.fail = fail
        self.calls = []

    def count_by_ip_since(self, ip, since):
        self.calls.append(("ip", ip, since))
        if self.fail:
            raise RuntimeError("timeout")
        return self.ip_count

    def count_all_since(self, since):
        self.calls.append(("all", since))
        return self.global_count


@pytest.fixture
def clock():
    return FakeClock()


def make_checker(counter, clock):
    return QuotaChecker(counter, clock, per_key_limit=5, global_limit=20)


class TestCheckDailyLimits:
    def test_under_both_limits(self, clock):
        make_checker(StubCounter(4, 19), clock).check_daily_limits("ip")

    def test_per_key_limit_reached(self, clock):
        with pytest.raises(TooManyAttemptsError) as exc_info:
            make_checker(StubCounter(5, 3), clock).check_daily_limits("ip")
        err = exc_info.value
        assert err.scope == LimitScope.PER_KEY
        assert err.limit == 5
        assert "5" in err.message

    def test_global_limit_reached(self, clock):
        with pytest.raises(TooManyAttemptsError) as exc_info:
            make_checker(StubCounter(0, 20), clock).check_daily_limits("ip")
        assert exc_info.value.scope == LimitScope.GLOBAL
        assert exc_info.value.limit == 20

    def test_per_key_checked_before_global(self, clock):
        counter = StubCounter(5, 20)
        with pytest.raises(TooManyAttemptsError) as exc_info:
            make_checker(counter, clock).check_daily_limits("ip")
        assert exc_info.value.scope == LimitScope.PER_KEY
        assert [c[0] for c in counter.calls] == ["ip"]

    def test_window_starts_at_local_midnight(self, clock):
        clock.set(datetime(2026, 10, 18, 0, 5, tzinfo=clock.tz))
        counter = StubCounter()
        make_checker(counter, clock).check_daily_limits("ip")
        since = counter.calls[0][2]
        assert since == datetime(2026, 10, 18, tzinfo=clock.tz)

    def test_retry_at_is_next_midnight(self, clock):
        with pytest.raises(TooManyAttemptsError) as exc_info:
            make_checker(StubCounter(5, 0), clock).check_daily_limits("ip")
        assert exc_info.value.retry_at == clock.start_of_today() + timedelta(days=1)

    def test_count_failure_fails_closed(self, clock):
        with pytest.raises(InternalError) as exc_info:
            make_checker(StubCounter(fail=True), clock).check_daily_limits("ip")
        assert exc_info.value.status_code == 503

    def test_defaults(self, clock):
        checker = QuotaChecker(StubCounter(), clock)
        assert checker.per_key_limit == 5
        assert checker.global_limit == 20
