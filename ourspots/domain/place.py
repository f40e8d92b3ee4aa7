"""Place entity -- a bookmarked spot on the map."""
from datetime import datetime

from ourspots.domain.enums import PlaceType

NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 255
GRADE_MIN = 1
GRADE_MAX = 5

# Fields an update may touch
EDITABLE_FIELDS = (
    "name", "type", "address", "latitude", "longitude", "description",
    "image_url", "grade", "google_place_id", "google_rating", "google_ratings_total",
)


def _required_text(value: str, label: str, max_length: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label} cannot be blank")
    if len(value) > max_length:
        raise ValueError(f"{label} exceeds {max_length} characters")
    return value


def _coordinate(value: float, label: str, bound: float) -> float:
    value = float(value)
    if not -bound <= value <= bound:
        raise ValueError(f"{label} must be between -{bound:g} and {bound:g}")
    return value


class Place:
    """A named location with coordinates. Soft-deleted rows keep ``deleted_at``."""

    def __init__(
        self,
        name: str,
        type: PlaceType | str,
        address: str,
        latitude: float,
        longitude: float,
        description: str | None = None,
        image_url: str | None = None,
        grade: int | None = None,
        google_place_id: str | None = None,
        google_rating: float | None = None,
        google_ratings_total: int | None = None,
        place_id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        if grade is not None and not GRADE_MIN <= grade <= GRADE_MAX:
            raise ValueError(f"Grade must be between {GRADE_MIN} and {GRADE_MAX}")

        self._id = place_id
        self._name = _required_text(name, "Name", NAME_MAX_LENGTH)
        self._type = PlaceType(type)
        self._address = _required_text(address, "Address", ADDRESS_MAX_LENGTH)
        self._latitude = _coordinate(latitude, "Latitude", 90)
        self._longitude = _coordinate(longitude, "Longitude", 180)
        self._description = description
        self._image_url = image_url
        self._grade = grade
        self._google_place_id = google_place_id
        self._google_rating = google_rating
        self._google_ratings_total = google_ratings_total
        self._created_at = created_at
        self._updated_at = updated_at or created_at
        self._deleted_at = deleted_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> PlaceType:
        return self._type

    @property
    def address(self) -> str:
        return self._address

    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def image_url(self) -> str | None:
        return self._image_url

    @property
    def grade(self) -> int | None:
        return self._grade

    @property
    def google_place_id(self) -> str | None:
        return self._google_place_id

    @property
    def google_rating(self) -> float | None:
        return self._google_rating

    @property
    def google_ratings_total(self) -> int | None:
        return self._google_ratings_total

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    @property
    def updated_at(self) -> datetime | None:
        return self._updated_at

    @property
    def deleted_at(self) -> datetime | None:
        return self._deleted_at

    def with_changes(self, changes: dict, updated_at: datetime) -> "Place":
        """Return a copy with the given fields replaced. ``None`` values are ignored.

        The copy goes through the constructor, so the same rules apply.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
        fields = {name: getattr(self, name) for name in EDITABLE_FIELDS}
        fields.update({k: v for k, v in changes.items() if v is not None})
        return Place(
            **fields,
            place_id=self._id,
            created_at=self._created_at,
            updated_at=updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "type": self._type.value,
            "address": self._address,
            "latitude": self._latitude,
            "longitude": self._longitude,
            "description": self._description,
            "image_url": self._image_url,
            "grade": self._grade,
            "google_place_id": self._google_place_id,
            "google_rating": self._google_rating,
            "google_ratings_total": self._google_ratings_total,
            "created_at": self._created_at.isoformat() if self._created_at else None,
            "updated_at": self._updated_at.isoformat() if self._updated_at else None,
        }

    def to_marker_dict(self) -> dict:
        """Minimal shape for drawing a pin on the map."""
        return {
            "id": self._id,
            "name": self._name,
            "type": self._type.value,
            "latitude": self._latitude,
            "longitude": self._longitude,
        }
