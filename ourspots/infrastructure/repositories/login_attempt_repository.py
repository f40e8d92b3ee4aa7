"""Login attempt ledger -- append-only, read only for admin inspection."""
from typing import List

from ourspots.domain.login_attempt import AttemptRecord
from ourspots.infrastructure.clock import to_utc
from ourspots.infrastructure.database.models import LoginAttemptModel


def _to_domain(row: LoginAttemptModel) -> AttemptRecord:
    return AttemptRecord(
        record_id=row.id,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        endpoint=row.endpoint,
        attempt_count=row.attempt_count,
        blocked=row.blocked,
        created_at=to_utc(row.created_at) if row.created_at else None,
    )


class LoginAttemptRepository:
    """Failed login audit trail stored in ``login_attempts``."""

    def __init__(self, session_factory):
        self._sf = session_factory

    def append(self, record: AttemptRecord) -> AttemptRecord:
        """Insert one record and return it with id and timestamp filled in."""
        with self._sf() as session:
            row = LoginAttemptModel(
                ip_address=record.ip_address,
                user_agent=record.user_agent,
                endpoint=record.endpoint,
                attempt_count=record.attempt_count,
                blocked=record.blocked,
            )
            if record.created_at is not None:
                row.created_at = to_utc(record.created_at)
            session.add(row)
            session.commit()
            return _to_domain(row)

    def find_by_ip(self, ip_address: str, limit: int = 100) -> List[AttemptRecord]:
        """Records for one client key, newest first."""
        with self._sf() as session:
            rows = (
                session.query(LoginAttemptModel)
                .filter(LoginAttemptModel.ip_address == ip_address)
                .order_by(LoginAttemptModel.created_at.desc(), LoginAttemptModel.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_domain(r) for r in rows]
