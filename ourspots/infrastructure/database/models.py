"""SQLAlchemy ORM models -- schema definition."""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Float, Text, ForeignKey, Index
from sqlalchemy.orm import DeclarativeBase


def _utcnow():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Login attempts (append-only audit ledger)
# ---------------------------------------------------------------------------

class LoginAttemptModel(Base):
    __tablename__ = "login_attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ip_address = Column(String(255), nullable=False, index=True)
    user_agent = Column(String(500), nullable=True)
    endpoint = Column(String(100), nullable=False)
    # Running count at the time of this failure; advisory only
    attempt_count = Column(Integer, nullable=False, default=1)
    blocked = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


# ---------------------------------------------------------------------------
# Guestbook (soft delete via deleted_at)
# ---------------------------------------------------------------------------

class GuestbookMessageModel(Base):
    __tablename__ = "guestbook_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nickname = Column(String(20), nullable=True)
    content = Column(String(200), nullable=False)
    ip_address = Column(String(45), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    # NULL while visible
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_guestbook_messages_ip_created", "ip_address", "created_at"),
    )


# ---------------------------------------------------------------------------
# Places (soft delete via deleted_at)
# ---------------------------------------------------------------------------

class PlaceModel(Base):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(String(30), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    grade = Column(Integer, nullable=True)
    google_place_id = Column(String(255), nullable=True)
    google_rating = Column(Float, nullable=True)
    google_ratings_total = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_places_lat_lng", "latitude", "longitude"),
        Index("ix_places_name_address", "name", "address"),
    )


# ---------------------------------------------------------------------------
# Memos (hard delete)
# ---------------------------------------------------------------------------

class MemoModel(Base):
    __tablename__ = "memos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    place_id = Column(Integer, ForeignKey("places.id", ondelete="CASCADE"), nullable=False, index=True)
    item_name = Column(String(100), nullable=False)
    rating = Column(String(10), nullable=False)
    comment = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
