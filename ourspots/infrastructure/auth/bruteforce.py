"""In-memory brute-force protection for the admin login.

Process-local. Tracks consecutive failed attempts per client key (IP) and,
once the limit is reached, the time the lockout ends. Expired lockouts and
counts that went quiet are dropped on the next access for that key, and
swept from the whole map whenever a new failure is recorded. There is no
background task.

All read-modify-write sequences run under one lock, so concurrent failures
from the same key can never lose an increment or skip the threshold.
"""
import logging
import threading
from datetime import datetime, timedelta

from ourspots.domain.enums import LimitScope
from ourspots.domain.errors import TooManyAttemptsError
from ourspots.domain.login_attempt import AttemptState
from ourspots.infrastructure.env import env_int

logger = logging.getLogger("ourspots.auth")

# Configurable limits
MAX_ATTEMPTS = env_int("LOGIN_MAX_ATTEMPTS", 5)
BLOCK_HOURS = env_int("LOGIN_BLOCK_HOURS", 24)


def _blocked_error(blocked_until: datetime) -> TooManyAttemptsError:
    return TooManyAttemptsError(
        "Blocked after too many failed attempts. "
        f"Try again after {blocked_until:%Y-%m-%d %H:%M:%S}.",
        scope=LimitScope.LOCKOUT,
        retry_at=blocked_until,
    )


class LoginAttemptLimiter:
    """Per-key failure counter with a fixed-length lockout."""

    def __init__(
        self,
        clock,
        max_attempts: int | None = None,
        block_duration: timedelta | None = None,
        idle_expiry: timedelta | None = None,
    ):
        self._clock = clock
        self.max_attempts = max_attempts if max_attempts is not None else MAX_ATTEMPTS
        self.block_duration = (
            block_duration if block_duration is not None else timedelta(hours=BLOCK_HOURS)
        )
        # Unblocked counts older than this are forgotten
        self.idle_expiry = idle_expiry if idle_expiry is not None else self.block_duration
        # Map key -> AttemptState
        self._states: dict[str, AttemptState] = {}
        self._lock = threading.Lock()

    def _is_stale(self, state: AttemptState, now: datetime) -> bool:
        return state.is_expired_at(now) or state.is_idle_at(now, self.idle_expiry)

    def _current(self, key: str, now: datetime) -> AttemptState | None:
        """Return live state for *key*, dropping a stale one. Caller holds the lock."""
        state = self._states.get(key)
        if state is not None and self._is_stale(state, now):
            del self._states[key]
            return None
        return state

    def _sweep(self, now: datetime) -> None:
        """Drop every stale entry. Caller holds the lock."""
        stale = [k for k, s in self._states.items() if self._is_stale(s, now)]
        for key in stale:
            del self._states[key]

    def check(self, key: str) -> None:
        """Raise TooManyAttemptsError while *key* is locked out. Never counts a strike."""
        with self._lock:
            now = self._clock.now()
            state = self._current(key, now)
            if state is not None and state.is_blocked_at(now):
                raise _blocked_error(state.blocked_until)

    def record_failure(self, key: str) -> AttemptState:
        """Count one failure for *key* and return the new state.

        The lockout starts on the failure that reaches ``max_attempts``. A key
        that got locked out by a concurrent request is rejected instead of
        counted, so polling during a block never extends it.
        """
        with self._lock:
            now = self._clock.now()
            self._sweep(now)
            state = self._states.get(key)
            if state is not None and state.is_blocked_at(now):
                raise _blocked_error(state.blocked_until)

            count = (state.count if state else 0) + 1
            blocked_until = now + self.block_duration if count >= self.max_attempts else None
            new_state = AttemptState(count, blocked_until, last_failure_at=now)
            self._states[key] = new_state

        if blocked_until is not None:
            logger.warning("Login locked out for %s until %s (%d failures)", key, blocked_until, count)
        else:
            logger.warning("Failed login from %s (%d/%d)", key, count, self.max_attempts)
        return new_state

    def record_success(self, key: str) -> None:
        """Forget every prior failure for *key*."""
        with self._lock:
            now = self._clock.now()
            state = self._current(key, now)
            if state is not None and state.is_blocked_at(now):
                raise _blocked_error(state.blocked_until)
            self._states.pop(key, None)

    def unblock(self, key: str) -> bool:
        """Reset *key* to a clean slate. Returns False if there was nothing to remove."""
        with self._lock:
            removed = self._states.pop(key, None) is not None
        if removed:
            logger.info("Login state cleared for %s", key)
        return removed

    def get(self, key: str) -> AttemptState | None:
        with self._lock:
            return self._current(key, self._clock.now())

    def blocked_keys(self) -> dict[str, datetime]:
        """Snapshot of keys currently locked out, mapped to their lockout end."""
        with self._lock:
            now = self._clock.now()
            return {
                key: state.blocked_until
                for key, state in self._states.items()
                if state.is_blocked_at(now)
            }

    def __len__(self) -> int:
        """Entries currently held, stale ones included until the next sweep."""
        with self._lock:
            return len(self._states)
