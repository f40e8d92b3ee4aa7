"""Daily write caps backed by durable counts."""
import logging
from datetime import timedelta

from ourspots.domain.enums import LimitScope
from ourspots.domain.errors import InternalError, TooManyAttemptsError
from ourspots.infrastructure.env import env_int

logger = logging.getLogger("ourspots.guestbook")

DAILY_LIMIT_PER_IP = env_int("GUESTBOOK_DAILY_LIMIT_PER_IP", 5)
DAILY_LIMIT_GLOBAL = env_int("GUESTBOOK_DAILY_LIMIT_GLOBAL", 20)


class QuotaChecker:
    """Stateless per-key and global caps for the current calendar day.

    The day starts at midnight in the clock's fixed timezone. The per-key cap
    is checked first. If a count cannot be read the write is rejected.
    """

    def __init__(
        self,
        counter,
        clock,
        per_key_limit: int | None = None,
        global_limit: int | None = None,
    ):
        self._counter = counter
        self._clock = clock
        self.per_key_limit = per_key_limit if per_key_limit is not None else DAILY_LIMIT_PER_IP
        self.global_limit = global_limit if global_limit is not None else DAILY_LIMIT_GLOBAL

    def check_daily_limits(self, ip_address: str) -> None:
        start = self._clock.start_of_today()
        tomorrow = start + timedelta(days=1)

        ip_count = self._count(self._counter.count_by_ip_since, ip_address, start)
        if ip_count >= self.per_key_limit:
            raise TooManyAttemptsError(
                f"You can write up to {self.per_key_limit} messages per day.",
                scope=LimitScope.PER_KEY,
                retry_at=tomorrow,
                limit=self.per_key_limit,
            )

        global_count = self._count(self._counter.count_all_since, start)
        if global_count >= self.global_limit:
            raise TooManyAttemptsError(
                "Today's guestbook is full. Please try again tomorrow.",
                scope=LimitScope.GLOBAL,
                retry_at=tomorrow,
                limit=self.global_limit,
            )

    @staticmethod
    def _count(query, *args) -> int:
        try:
            return query(*args)
        except Exception as exc:
            logger.error("Daily limit count failed; rejecting write", exc_info=True)
            raise InternalError(
                "Cannot verify the daily limit right now. Please try again later.",
                status_code=503,
            ) from exc
