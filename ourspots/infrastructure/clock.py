"""Wall clock with a fixed, configured timezone.

Calendar-day boundaries (daily quotas) are computed in this timezone, never
in the host's ambient one. The default offset is UTC+9 (KST, no DST).
"""
from datetime import datetime, timedelta, timezone

from ourspots.infrastructure.env import env_float

DEFAULT_UTC_OFFSET_HOURS = 9


class SystemClock:
    """Timezone-aware ``now`` plus the start of the current calendar day."""

    def __init__(self, utc_offset_hours: float | None = None):
        if utc_offset_hours is None:
            utc_offset_hours = env_float("QUOTA_UTC_OFFSET_HOURS", DEFAULT_UTC_OFFSET_HOURS)
        self._tz = timezone(timedelta(hours=utc_offset_hours))

    @property
    def tz(self) -> timezone:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def start_of_today(self) -> datetime:
        return start_of_day(self.now())


def start_of_day(moment: datetime) -> datetime:
    """Midnight of *moment*'s calendar day, in *moment*'s own timezone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def to_utc(moment: datetime) -> datetime:
    """Normalise to UTC. Naive values (e.g. read back from SQLite) are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
