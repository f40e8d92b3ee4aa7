"""Login attempt state (in-memory) and audit record (durable)."""
from datetime import datetime

USER_AGENT_MAX_LENGTH = 500


class AttemptState:
    """Consecutive failures for one client key.

    ``blocked_until`` is set if and only if ``count`` reached the limiter's
    maximum when the state was built. ``last_failure_at`` lets the limiter
    forget counts that went quiet without ever reaching a lockout.
    """

    __slots__ = ("_count", "_blocked_until", "_last_failure_at")

    def __init__(
        self,
        count: int,
        blocked_until: datetime | None = None,
        last_failure_at: datetime | None = None,
    ):
        if count < 1:
            raise ValueError("Attempt count must be >= 1")
        self._count = count
        self._blocked_until = blocked_until
        self._last_failure_at = last_failure_at

    @property
    def count(self) -> int:
        return self._count

    @property
    def blocked_until(self) -> datetime | None:
        return self._blocked_until

    def is_blocked_at(self, now: datetime) -> bool:
        return self._blocked_until is not None and now < self._blocked_until

    @property
    def last_failure_at(self) -> datetime | None:
        return self._last_failure_at

    def is_expired_at(self, now: datetime) -> bool:
        return self._blocked_until is not None and now >= self._blocked_until

    def is_idle_at(self, now: datetime, idle_expiry) -> bool:
        """True for an unblocked count whose last failure is older than *idle_expiry*."""
        return (
            self._blocked_until is None
            and self._last_failure_at is not None
            and now >= self._last_failure_at + idle_expiry
        )

    def __repr__(self) -> str:
        return f"AttemptState(count={self._count}, blocked_until={self._blocked_until!r})"


class AttemptRecord:
    """One failed authentication attempt. Append-only; never mutated."""

    def __init__(
        self,
        ip_address: str,
        endpoint: str,
        attempt_count: int,
        blocked: bool,
        user_agent: str | None = None,
        created_at: datetime | None = None,
        record_id: int | None = None,
    ):
        self._id = record_id
        self._ip_address = ip_address
        self._user_agent = user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None
        self._endpoint = endpoint
        self._attempt_count = attempt_count
        self._blocked = blocked
        self._created_at = created_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def ip_address(self) -> str:
        return self._ip_address

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def attempt_count(self) -> int:
        return self._attempt_count

    @property
    def blocked(self) -> bool:
        return self._blocked

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "ip_address": self._ip_address,
            "user_agent": self._user_agent,
            "endpoint": self._endpoint,
            "attempt_count": self._attempt_count,
            "blocked": self._blocked,
            "created_at": self._created_at.isoformat() if self._created_at else None,
        }
