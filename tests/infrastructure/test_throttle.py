"""Unit tests for the guestbook write cooldown."""
from datetime import timedelta

import pytest

from ourspots.domain.enums import LimitScope
from ourspots.domain.errors import TooManyAttemptsError
from ourspots.infrastructure.throttle import WriteThrottle
from tests.conftest import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def throttle(clock):
    return WriteThrottle(clock, cooldown=timedelta(seconds=5), expiry=timedelta(minutes=30))


class TestCheck:
    def test_first_write_allowed(self, throttle):
        throttle.check("ip")

    def test_write_within_cooldown_rejected(self, throttle, clock):
        throttle.record("ip")
        clock.advance(seconds=4)
        with pytest.raises(TooManyAttemptsError) as exc_info:
            throttle.check("ip")
        assert exc_info.value.scope == LimitScope.COOLDOWN
        assert exc_info.value.retry_at == clock.now() + timedelta(seconds=1)

    def test_write_after_cooldown_allowed(self, throttle, clock):
        throttle.record("ip")
        clock.advance(seconds=5)
        throttle.check("ip")

    def test_keys_are_independent(self, throttle):
        throttle.record("a")
        throttle.check("b")

    def test_expiry_must_exceed_cooldown(self, clock):
        with pytest.raises(ValueError):
            WriteThrottle(clock, cooldown=timedelta(seconds=10), expiry=timedelta(seconds=10))


class TestPurge:
    def test_stale_entries_purged_on_check(self, throttle, clock):
        throttle.record("old")
        clock.advance(minutes=31)
        throttle.record("fresh")
        throttle.check("other")
        assert len(throttle) == 1
        assert throttle.last_write_at("old") is None
        assert throttle.last_write_at("fresh") is not None


class TestCheckAndRecordSubmission:
    def test_success_records_time_after_block(self, throttle, clock):
        with throttle.check_and_record_submission("ip"):
            clock.advance(seconds=1)
        assert throttle.last_write_at("ip") == clock.now()

    def test_second_submission_rejected_then_allowed(self, throttle, clock):
        with throttle.check_and_record_submission("ip"):
            pass
        clock.advance(seconds=2)
        with pytest.raises(TooManyAttemptsError):
            with throttle.check_and_record_submission("ip"):
                pass
        clock.advance(seconds=3)
        with throttle.check_and_record_submission("ip"):
            pass

    def test_failure_inside_block_releases_reservation(self, throttle):
        with pytest.raises(RuntimeError):
            with throttle.check_and_record_submission("ip"):
                raise RuntimeError("db down")
        assert throttle.last_write_at("ip") is None
        throttle.check("ip")

    def test_failure_restores_previous_write_time(self, throttle, clock):
        throttle.record("ip")
        first = throttle.last_write_at("ip")
        clock.advance(seconds=10)
        with pytest.raises(RuntimeError):
            with throttle.check_and_record_submission("ip"):
                raise RuntimeError("quota")
        assert throttle.last_write_at("ip") == first

    def test_reservation_blocks_concurrent_submission(self, throttle):
        with throttle.check_and_record_submission("ip"):
            with pytest.raises(TooManyAttemptsError):
                throttle.check("ip")
