"""Guestbook message entity."""
from datetime import datetime

NICKNAME_MAX_LENGTH = 20
CONTENT_MAX_LENGTH = 200


class GuestbookMessage:
    """A free-form visitor comment. Soft-deleted rows keep ``deleted_at``."""

    def __init__(
        self,
        content: str,
        ip_address: str,
        nickname: str | None = None,
        message_id: int | None = None,
        created_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        content = content.strip()
        if not content:
            raise ValueError("Message content cannot be blank")
        if len(content) > CONTENT_MAX_LENGTH:
            raise ValueError(f"Message content exceeds {CONTENT_MAX_LENGTH} characters")
        if nickname is not None:
            nickname = nickname.strip() or None
        if nickname and len(nickname) > NICKNAME_MAX_LENGTH:
            raise ValueError(f"Nickname exceeds {NICKNAME_MAX_LENGTH} characters")

        self._id = message_id
        self._nickname = nickname
        self._content = content
        self._ip_address = ip_address
        self._created_at = created_at
        self._deleted_at = deleted_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def nickname(self) -> str | None:
        return self._nickname

    @property
    def content(self) -> str:
        return self._content

    @property
    def ip_address(self) -> str:
        return self._ip_address

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    @property
    def deleted_at(self) -> datetime | None:
        return self._deleted_at

    def is_owned_by(self, ip_address: str) -> bool:
        return self._ip_address == ip_address

    def to_public_dict(self, deletable: bool) -> dict:
        """Response shape. The author IP is never exposed."""
        return {
            "id": self._id,
            "nickname": self._nickname,
            "content": self._content,
            "created_at": self._created_at.isoformat() if self._created_at else None,
            "deletable": deletable,
        }
