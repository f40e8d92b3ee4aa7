"""Place and memo repository tests against in-memory SQLite."""
from datetime import datetime, timedelta, timezone

import pytest

from ourspots.domain.enums import PlaceType, Rating
from ourspots.domain.memo import Memo
from ourspots.domain.place import Place
from ourspots.infrastructure.repositories.memo_repository import MemoRepository
from ourspots.infrastructure.repositories.place_repository import PlaceRepository

T0 = datetime(2026, 10, 18, 3, 0, tzinfo=timezone.utc)

# Seoul viewport used by the bounds tests
SEOUL = (37.4, 126.8, 37.7, 127.2)


@pytest.fixture
def places(session_factory):
    return PlaceRepository(session_factory)


@pytest.fixture
def memos(session_factory):
    return MemoRepository(session_factory)


def _place(name="Noodle House", type=PlaceType.RESTAURANT, address="Seoul", lat=37.5, lng=127.0):
    return Place(name=name, type=type, address=address, latitude=lat, longitude=lng, created_at=T0)


class TestPlaceRepositoryWrite:
    def test_save_assigns_id(self, places):
        saved = places.save(_place())
        assert saved.id is not None
        assert saved.created_at == T0
        assert saved.updated_at == T0
        assert places.find_by_id(saved.id).name == "Noodle House"

    def test_update_overwrites_fields(self, places):
        saved = places.save(_place())
        later = T0 + timedelta(hours=2)
        updated = places.update(saved.with_changes({"name": "Ramen Bar", "grade": 2}, later))
        assert updated.name == "Ramen Bar"
        assert updated.grade == 2
        assert updated.updated_at == later
        assert updated.created_at == T0

    def test_update_of_deleted_place_returns_none(self, places):
        saved = places.save(_place())
        places.soft_delete(saved.id)
        assert places.update(saved.with_changes({"name": "x"}, T0)) is None

    def test_soft_delete_hides_place(self, places):
        first = places.save(_place("A"))
        places.save(_place("B"))
        assert places.soft_delete(first.id, deleted_at=T0) is True
        assert places.find_by_id(first.id) is None
        assert not places.exists(first.id)
        assert [p.name for p in places.find_all()] == ["B"]

    def test_soft_delete_unknown_returns_false(self, places):
        assert places.soft_delete(999) is False


class TestPlaceRepositoryRead:
    def test_find_all_filters_by_type(self, places):
        places.save(_place("R1"))
        places.save(_place("R2"))
        places.save(_place("P1", type=PlaceType.KIDS_PLAYGROUND))
        assert [p.name for p in places.find_all(PlaceType.RESTAURANT)] == ["R1", "R2"]
        assert len(places.find_all()) == 3

    def test_exists_by_name_and_address(self, places):
        places.save(_place("Cafe", address="Gangnam"))
        assert places.exists_by_name_and_address("Cafe", "Gangnam")
        assert not places.exists_by_name_and_address("Cafe", "Mapo")

    def test_deleted_place_does_not_block_name_reuse(self, places):
        saved = places.save(_place("Cafe", address="Gangnam"))
        places.soft_delete(saved.id)
        assert not places.exists_by_name_and_address("Cafe", "Gangnam")

    def test_within_bounds(self, places):
        places.save(_place("Gangnam", lat=37.5, lng=127.0))
        places.save(_place("Gangbuk", lat=37.6, lng=127.0))
        places.save(_place("Busan", lat=35.1, lng=129.0))
        assert [p.name for p in places.find_within_bounds(*SEOUL)] == ["Gangnam", "Gangbuk"]

    def test_bounds_include_edges(self, places):
        places.save(_place("Corner", lat=37.4, lng=126.8))
        assert len(places.find_within_bounds(*SEOUL)) == 1

    def test_within_bounds_and_type(self, places):
        places.save(_place("Gangnam food", lat=37.5, lng=127.0))
        places.save(_place("Gangnam park", type=PlaceType.KIDS_PLAYGROUND, lat=37.5, lng=127.0))
        places.save(_place("Busan food", lat=35.1, lng=129.0))
        result = places.find_within_bounds(*SEOUL, place_type=PlaceType.RESTAURANT)
        assert [p.name for p in result] == ["Gangnam food"]


class TestMemoRepository:
    def test_save_and_list_by_place(self, places, memos):
        place = places.save(_place())
        other = places.save(_place("Other"))
        memos.save(Memo(place_id=place.id, item_name="Tea", rating=Rating.GOOD, created_at=T0))
        memos.save(Memo(place_id=place.id, item_name="Cake", rating=Rating.BAD,
                        created_at=T0 + timedelta(minutes=1)))
        memos.save(Memo(place_id=other.id, item_name="Soup", rating=Rating.NORMAL, created_at=T0))
        result = memos.find_by_place(place.id)
        assert [m.item_name for m in result] == ["Tea", "Cake"]
        assert result[1].rating is Rating.BAD

    def test_update(self, places, memos):
        place = places.save(_place())
        saved = memos.save(Memo(place_id=place.id, item_name="Tea", rating=Rating.GOOD))
        updated = memos.update(saved.with_changes(comment="too sweet", rating=Rating.NORMAL))
        assert updated.comment == "too sweet"
        assert memos.find_by_id(saved.id).rating is Rating.NORMAL

    def test_delete(self, places, memos):
        place = places.save(_place())
        saved = memos.save(Memo(place_id=place.id, item_name="Tea", rating=Rating.GOOD))
        assert memos.delete(saved.id) is True
        assert memos.find_by_id(saved.id) is None
        assert memos.delete(saved.id) is False
