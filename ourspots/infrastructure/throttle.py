"""Write cooldown for content submissions (guestbook).

Remembers when each client key last wrote. A new submission inside the
cooldown window is rejected before any database work happens. Entries older
than the cache expiry are purged at the start of every check to keep the map
bounded.
"""
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta

from ourspots.domain.enums import LimitScope
from ourspots.domain.errors import TooManyAttemptsError
from ourspots.infrastructure.env import env_int

COOLDOWN_SECONDS = env_int("GUESTBOOK_COOLDOWN_SECONDS", 5)
CACHE_EXPIRY_MINUTES = env_int("GUESTBOOK_CACHE_EXPIRY_MINUTES", 30)


class WriteThrottle:
    """Per-key minimum interval between accepted writes."""

    def __init__(
        self,
        clock,
        cooldown: timedelta | None = None,
        expiry: timedelta | None = None,
    ):
        self._clock = clock
        self.cooldown = cooldown if cooldown is not None else timedelta(seconds=COOLDOWN_SECONDS)
        self.expiry = expiry if expiry is not None else timedelta(minutes=CACHE_EXPIRY_MINUTES)
        if self.expiry <= self.cooldown:
            raise ValueError("Cache expiry must exceed the cooldown window")
        # Map key -> time of last accepted write
        self._last_write: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def _purge(self, now: datetime) -> None:
        stale = [k for k, t in self._last_write.items() if t + self.expiry < now]
        for key in stale:
            del self._last_write[key]

    def _reject_if_cooling_down(self, key: str, now: datetime) -> datetime | None:
        last = self._last_write.get(key)
        if last is not None and last + self.cooldown > now:
            raise TooManyAttemptsError(
                "Please try again in a moment.",
                scope=LimitScope.COOLDOWN,
                retry_at=last + self.cooldown,
            )
        return last

    def check(self, key: str) -> None:
        """Raise TooManyAttemptsError if *key* wrote within the cooldown window."""
        with self._lock:
            now = self._clock.now()
            self._purge(now)
            self._reject_if_cooling_down(key, now)

    def record(self, key: str) -> None:
        with self._lock:
            self._last_write[key] = self._clock.now()

    @contextmanager
    def check_and_record_submission(self, key: str):
        """Guard one submission from *key*.

        The cooldown slot is reserved on entry so a concurrent submission from
        the same key is rejected; it is confirmed with the current time once
        the block completes, and released if the block raises.
        """
        with self._lock:
            now = self._clock.now()
            self._purge(now)
            previous = self._reject_if_cooling_down(key, now)
            self._last_write[key] = now
        try:
            yield
        except BaseException:
            with self._lock:
                if previous is None:
                    self._last_write.pop(key, None)
                else:
                    self._last_write[key] = previous
            raise
        self.record(key)

    def last_write_at(self, key: str) -> datetime | None:
        with self._lock:
            return self._last_write.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_write)
