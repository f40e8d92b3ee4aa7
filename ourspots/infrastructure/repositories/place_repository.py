"""Place persistence with soft delete and bounding-box queries."""
from datetime import datetime, timezone
from typing import List, Optional

from ourspots.domain.enums import PlaceType
from ourspots.domain.place import Place
from ourspots.infrastructure.clock import to_utc
from ourspots.infrastructure.database.models import PlaceModel


def _to_domain(row: PlaceModel) -> Place:
    return Place(
        place_id=row.id,
        name=row.name,
        type=row.type,
        address=row.address,
        latitude=row.latitude,
        longitude=row.longitude,
        description=row.description,
        image_url=row.image_url,
        grade=row.grade,
        google_place_id=row.google_place_id,
        google_rating=row.google_rating,
        google_ratings_total=row.google_ratings_total,
        created_at=to_utc(row.created_at) if row.created_at else None,
        updated_at=to_utc(row.updated_at) if row.updated_at else None,
        deleted_at=to_utc(row.deleted_at) if row.deleted_at else None,
    )


def _copy_fields(place: Place, row: PlaceModel) -> None:
    row.name = place.name
    row.type = place.type.value
    row.address = place.address
    row.latitude = place.latitude
    row.longitude = place.longitude
    row.description = place.description
    row.image_url = place.image_url
    row.grade = place.grade
    row.google_place_id = place.google_place_id
    row.google_rating = place.google_rating
    row.google_ratings_total = place.google_ratings_total


class PlaceRepository:
    """Rows in ``places``. Every read skips soft-deleted places."""

    def __init__(self, session_factory):
        self._sf = session_factory

    def _visible(self, session):
        return session.query(PlaceModel).filter(PlaceModel.deleted_at.is_(None))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, place: Place) -> Place:
        with self._sf() as session:
            row = PlaceModel()
            _copy_fields(place, row)
            if place.created_at is not None:
                row.created_at = to_utc(place.created_at)
                row.updated_at = to_utc(place.updated_at or place.created_at)
            session.add(row)
            session.commit()
            return _to_domain(row)

    def update(self, place: Place) -> Optional[Place]:
        """Overwrite a visible place. Returns None if it no longer exists."""
        with self._sf() as session:
            row = self._visible(session).filter(PlaceModel.id == place.id).first()
            if row is None:
                return None
            _copy_fields(place, row)
            row.updated_at = to_utc(place.updated_at) if place.updated_at else datetime.now(timezone.utc)
            session.commit()
            return _to_domain(row)

    def soft_delete(self, place_id: int, deleted_at: datetime | None = None) -> bool:
        with self._sf() as session:
            row = self._visible(session).filter(PlaceModel.id == place_id).first()
            if row is None:
                return False
            row.deleted_at = to_utc(deleted_at) if deleted_at else datetime.now(timezone.utc)
            session.commit()
            return True

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_by_id(self, place_id: int) -> Optional[Place]:
        with self._sf() as session:
            row = self._visible(session).filter(PlaceModel.id == place_id).first()
            return _to_domain(row) if row else None

    def exists(self, place_id: int) -> bool:
        with self._sf() as session:
            return self._visible(session).filter(PlaceModel.id == place_id).first() is not None

    def exists_by_name_and_address(self, name: str, address: str) -> bool:
        with self._sf() as session:
            return (
                self._visible(session)
                .filter(PlaceModel.name == name, PlaceModel.address == address)
                .first()
            ) is not None

    def find_all(self, place_type: PlaceType | None = None) -> List[Place]:
        with self._sf() as session:
            q = self._visible(session)
            if place_type is not None:
                q = q.filter(PlaceModel.type == PlaceType(place_type).value)
            return [_to_domain(r) for r in q.order_by(PlaceModel.id).all()]

    def find_within_bounds(
        self,
        sw_lat: float,
        sw_lng: float,
        ne_lat: float,
        ne_lng: float,
        place_type: PlaceType | None = None,
    ) -> List[Place]:
        """Places inside the box, edges included."""
        with self._sf() as session:
            q = self._visible(session).filter(
                PlaceModel.latitude.between(sw_lat, ne_lat),
                PlaceModel.longitude.between(sw_lng, ne_lng),
            )
            if place_type is not None:
                q = q.filter(PlaceModel.type == PlaceType(place_type).value)
            return [_to_domain(r) for r in q.order_by(PlaceModel.id).all()]
