"""Guestbook persistence with soft delete."""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func

from ourspots.domain.guestbook import GuestbookMessage
from ourspots.infrastructure.clock import to_utc
from ourspots.infrastructure.database.models import GuestbookMessageModel


def _to_domain(row: GuestbookMessageModel) -> GuestbookMessage:
    return GuestbookMessage(
        message_id=row.id,
        nickname=row.nickname,
        content=row.content,
        ip_address=row.ip_address,
        created_at=to_utc(row.created_at) if row.created_at else None,
        deleted_at=to_utc(row.deleted_at) if row.deleted_at else None,
    )


class GuestbookRepository:
    """Guestbook rows in ``guestbook_messages``.

    Reads skip soft-deleted rows, except ``count_all_since`` which counts
    every write made since a point in time.
    """

    def __init__(self, session_factory):
        self._sf = session_factory

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, message: GuestbookMessage) -> GuestbookMessage:
        with self._sf() as session:
            row = GuestbookMessageModel(
                nickname=message.nickname,
                content=message.content,
                ip_address=message.ip_address,
            )
            if message.created_at is not None:
                row.created_at = to_utc(message.created_at)
            session.add(row)
            session.commit()
            return _to_domain(row)

    def soft_delete(self, message_id: int, deleted_at: datetime | None = None) -> bool:
        """Mark a visible message deleted. Returns False if it was not visible."""
        with self._sf() as session:
            row = (
                session.query(GuestbookMessageModel)
                .filter(
                    GuestbookMessageModel.id == message_id,
                    GuestbookMessageModel.deleted_at.is_(None),
                )
                .first()
            )
            if row is None:
                return False
            row.deleted_at = to_utc(deleted_at) if deleted_at else datetime.now(timezone.utc)
            session.commit()
            return True

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_by_id(self, message_id: int) -> Optional[GuestbookMessage]:
        with self._sf() as session:
            row = (
                session.query(GuestbookMessageModel)
                .filter(
                    GuestbookMessageModel.id == message_id,
                    GuestbookMessageModel.deleted_at.is_(None),
                )
                .first()
            )
            return _to_domain(row) if row else None

    def find_recent(self, limit: int) -> List[GuestbookMessage]:
        """Newest visible messages first."""
        with self._sf() as session:
            rows = (
                session.query(GuestbookMessageModel)
                .filter(GuestbookMessageModel.deleted_at.is_(None))
                .order_by(GuestbookMessageModel.created_at.desc(), GuestbookMessageModel.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_domain(r) for r in rows]

    def count_by_ip_since(self, ip_address: str, since: datetime) -> int:
        """Visible messages written by *ip_address* at or after *since*."""
        with self._sf() as session:
            return (
                session.query(func.count(GuestbookMessageModel.id))
                .filter(
                    GuestbookMessageModel.ip_address == ip_address,
                    GuestbookMessageModel.created_at >= to_utc(since),
                    GuestbookMessageModel.deleted_at.is_(None),
                )
                .scalar()
            ) or 0

    def count_all_since(self, since: datetime) -> int:
        """Every message written at or after *since*, soft-deleted ones included."""
        with self._sf() as session:
            return (
                session.query(func.count(GuestbookMessageModel.id))
                .filter(GuestbookMessageModel.created_at >= to_utc(since))
                .scalar()
            ) or 0
