"""Place use cases: browse, admin CRUD, map markers."""
import logging
from typing import List

from ourspots.domain.enums import PlaceType
from ourspots.domain.errors import ConflictError, InvalidRequestError, NotFoundError
from ourspots.domain.place import Place

logger = logging.getLogger("ourspots.places")


class PlaceService:
    def __init__(self, repo, clock):
        self._repo = repo
        self._clock = clock

    def _get_or_raise(self, place_id: int) -> Place:
        place = self._repo.find_by_id(place_id)
        if place is None:
            raise NotFoundError(f"Place not found: {place_id}")
        return place

    def get_all_places(self, place_type: PlaceType | None = None) -> List[dict]:
        return [p.to_dict() for p in self._repo.find_all(place_type)]

    def get_place(self, place_id: int) -> dict:
        return self._get_or_raise(place_id).to_dict()

    def create_place(self, **fields) -> dict:
        """Register a new place. Name plus address must be unique among visible places."""
        now = self._clock.now()
        try:
            place = Place(**fields, created_at=now, updated_at=now)
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e

        if self._repo.exists_by_name_and_address(place.name, place.address):
            raise ConflictError(f"A place with this name is already registered at this address: {place.name}")

        saved = self._repo.save(place)
        logger.info("Place %s created: %s", saved.id, saved.name)
        return saved.to_dict()

    def update_place(self, place_id: int, changes: dict) -> dict:
        """Apply a partial update. Fields left as None keep their value."""
        current = self._get_or_raise(place_id)
        try:
            updated = current.with_changes(changes, updated_at=self._clock.now())
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e

        saved = self._repo.update(updated)
        if saved is None:
            raise NotFoundError(f"Place not found: {place_id}")
        logger.info("Place %s updated", place_id)
        return saved.to_dict()

    def delete_place(self, place_id: int) -> None:
        if not self._repo.soft_delete(place_id, deleted_at=self._clock.now()):
            raise NotFoundError(f"Place not found: {place_id}")
        logger.info("Place %s deleted", place_id)

    def get_markers(
        self,
        place_type: PlaceType | None = None,
        sw_lat: float | None = None,
        sw_lng: float | None = None,
        ne_lat: float | None = None,
        ne_lng: float | None = None,
    ) -> List[dict]:
        """Map pins, limited to the viewport when all four corners are given.

        A partial set of corners is ignored and the whole map is returned.
        """
        bounds = (sw_lat, sw_lng, ne_lat, ne_lng)
        if all(v is not None for v in bounds):
            places = self._repo.find_within_bounds(*bounds, place_type=place_type)
        else:
            places = self._repo.find_all(place_type)
        return [p.to_marker_dict() for p in places]
