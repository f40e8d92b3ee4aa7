"""Memo persistence."""
from typing import List, Optional

from ourspots.domain.memo import Memo
from ourspots.infrastructure.clock import to_utc
from ourspots.infrastructure.database.models import MemoModel


def _to_domain(row: MemoModel) -> Memo:
    return Memo(
        memo_id=row.id,
        place_id=row.place_id,
        item_name=row.item_name,
        rating=row.rating,
        comment=row.comment,
        created_at=to_utc(row.created_at) if row.created_at else None,
    )


class MemoRepository:
    def __init__(self, session_factory):
        self._sf = session_factory

    def save(self, memo: Memo) -> Memo:
        with self._sf() as session:
            row = MemoModel(
                place_id=memo.place_id,
                item_name=memo.item_name,
                rating=memo.rating.value,
                comment=memo.comment,
            )
            if memo.created_at is not None:
                row.created_at = to_utc(memo.created_at)
            session.add(row)
            session.commit()
            return _to_domain(row)

    def update(self, memo: Memo) -> Optional[Memo]:
        with self._sf() as session:
            row = session.query(MemoModel).filter(MemoModel.id == memo.id).first()
            if row is None:
                return None
            row.item_name = memo.item_name
            row.rating = memo.rating.value
            row.comment = memo.comment
            session.commit()
            return _to_domain(row)

    def delete(self, memo_id: int) -> bool:
        with self._sf() as session:
            deleted = session.query(MemoModel).filter(MemoModel.id == memo_id).delete()
            session.commit()
            return deleted > 0

    def find_by_id(self, memo_id: int) -> Optional[Memo]:
        with self._sf() as session:
            row = session.query(MemoModel).filter(MemoModel.id == memo_id).first()
            return _to_domain(row) if row else None

    def find_by_place(self, place_id: int) -> List[Memo]:
        """Memos for one place, oldest first."""
        with self._sf() as session:
            rows = (
                session.query(MemoModel)
                .filter(MemoModel.place_id == place_id)
                .order_by(MemoModel.created_at, MemoModel.id)
                .all()
            )
            return [_to_domain(r) for r in rows]
