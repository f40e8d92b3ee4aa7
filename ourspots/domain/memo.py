"""Memo entity -- a rated note about one item at a place."""
from datetime import datetime

from ourspots.domain.enums import Rating

ITEM_NAME_MAX_LENGTH = 100
COMMENT_MAX_LENGTH = 500


class Memo:
    def __init__(
        self,
        place_id: int,
        item_name: str,
        rating: Rating | str,
        comment: str | None = None,
        memo_id: int | None = None,
        created_at: datetime | None = None,
    ):
        item_name = (item_name or "").strip()
        if not item_name:
            raise ValueError("Item name cannot be blank")
        if len(item_name) > ITEM_NAME_MAX_LENGTH:
            raise ValueError(f"Item name exceeds {ITEM_NAME_MAX_LENGTH} characters")
        if comment is not None:
            comment = comment.strip() or None
        if comment and len(comment) > COMMENT_MAX_LENGTH:
            raise ValueError(f"Comment exceeds {COMMENT_MAX_LENGTH} characters")

        self._id = memo_id
        self._place_id = place_id
        self._item_name = item_name
        self._rating = Rating(rating)
        self._comment = comment
        self._created_at = created_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def place_id(self) -> int:
        return self._place_id

    @property
    def item_name(self) -> str:
        return self._item_name

    @property
    def rating(self) -> Rating:
        return self._rating

    @property
    def comment(self) -> str | None:
        return self._comment

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def with_changes(
        self,
        item_name: str | None = None,
        rating: Rating | str | None = None,
        comment: str | None = None,
    ) -> "Memo":
        return Memo(
            place_id=self._place_id,
            item_name=item_name if item_name is not None else self._item_name,
            rating=rating if rating is not None else self._rating,
            comment=comment if comment is not None else self._comment,
            memo_id=self._id,
            created_at=self._created_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "place_id": self._place_id,
            "item_name": self._item_name,
            "rating": self._rating.value,
            "comment": self._comment,
            "created_at": self._created_at.isoformat() if self._created_at else None,
        }
