"""Unit tests for the Memo entity."""
import pytest

from ourspots.domain.enums import Rating
from ourspots.domain.memo import COMMENT_MAX_LENGTH, Memo


class TestMemo:
    def test_fields_trimmed(self):
        memo = Memo(place_id=1, item_name="  Cold noodles ", rating="GOOD", comment="  tasty ")
        assert memo.item_name == "Cold noodles"
        assert memo.rating is Rating.GOOD
        assert memo.comment == "tasty"

    def test_blank_comment_becomes_none(self):
        assert Memo(place_id=1, item_name="Tea", rating=Rating.BAD, comment="  ").comment is None

    def test_blank_item_name_rejected(self):
        with pytest.raises(ValueError):
            Memo(place_id=1, item_name=" ", rating=Rating.GOOD)

    def test_unknown_rating_rejected(self):
        with pytest.raises(ValueError):
            Memo(place_id=1, item_name="Tea", rating="EXCELLENT")

    def test_too_long_comment_rejected(self):
        with pytest.raises(ValueError):
            Memo(place_id=1, item_name="Tea", rating=Rating.GOOD, comment="c" * (COMMENT_MAX_LENGTH + 1))

    def test_with_changes_keeps_unset_fields(self):
        memo = Memo(place_id=4, item_name="Tea", rating=Rating.GOOD, comment="hot", memo_id=9)
        changed = memo.with_changes(rating="NORMAL")
        assert changed.id == 9
        assert changed.place_id == 4
        assert changed.item_name == "Tea"
        assert changed.rating is Rating.NORMAL
        assert changed.comment == "hot"

    def test_to_dict(self):
        memo = Memo(place_id=4, item_name="Tea", rating=Rating.BAD, memo_id=2)
        assert memo.to_dict() == {
            "id": 2,
            "place_id": 4,
            "item_name": "Tea",
            "rating": "BAD",
            "comment": None,
            "created_at": None,
        }
