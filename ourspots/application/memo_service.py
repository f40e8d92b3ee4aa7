"""Memo use cases, scoped to a visible place."""
import logging
from typing import List

from ourspots.domain.enums import Rating
from ourspots.domain.errors import InvalidRequestError, NotFoundError
from ourspots.domain.memo import Memo

logger = logging.getLogger("ourspots.memos")


class MemoService:
    def __init__(self, memo_repo, place_repo, clock):
        self._memos = memo_repo
        self._places = place_repo
        self._clock = clock

    def _require_place(self, place_id: int) -> None:
        if not self._places.exists(place_id):
            raise NotFoundError(f"Place not found: {place_id}")

    def get_memos_by_place(self, place_id: int) -> List[dict]:
        self._require_place(place_id)
        return [m.to_dict() for m in self._memos.find_by_place(place_id)]

    def create_memo(
        self,
        place_id: int,
        item_name: str,
        rating: Rating | str,
        comment: str | None = None,
    ) -> dict:
        self._require_place(place_id)
        try:
            memo = Memo(
                place_id=place_id,
                item_name=item_name,
                rating=rating,
                comment=comment,
                created_at=self._clock.now(),
            )
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e

        saved = self._memos.save(memo)
        logger.info("Memo %s added to place %s", saved.id, place_id)
        return saved.to_dict()

    def update_memo(
        self,
        memo_id: int,
        item_name: str | None = None,
        rating: Rating | str | None = None,
        comment: str | None = None,
    ) -> dict:
        memo = self._memos.find_by_id(memo_id)
        if memo is None:
            raise NotFoundError(f"Memo not found: {memo_id}")
        try:
            changed = memo.with_changes(item_name=item_name, rating=rating, comment=comment)
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e

        saved = self._memos.update(changed)
        if saved is None:
            raise NotFoundError(f"Memo not found: {memo_id}")
        return saved.to_dict()

    def delete_memo(self, memo_id: int) -> None:
        if not self._memos.delete(memo_id):
            raise NotFoundError(f"Memo not found: {memo_id}")
        logger.info("Memo %s deleted", memo_id)
