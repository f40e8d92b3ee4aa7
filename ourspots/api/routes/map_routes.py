"""Map API routes -- marker pins for the visible viewport."""
from fastapi import APIRouter, Query

from ourspots.domain.enums import PlaceType

router = APIRouter(prefix="/api/map", tags=["map"])

_place_service = None


def init_map_routes(place_service):
    global _place_service
    _place_service = place_service


@router.get("/markers")
def api_markers(
    type: PlaceType | None = Query(default=None),
    sw_lat: float | None = Query(default=None, alias="swLat"),
    sw_lng: float | None = Query(default=None, alias="swLng"),
    ne_lat: float | None = Query(default=None, alias="neLat"),
    ne_lng: float | None = Query(default=None, alias="neLng"),
):
    """Pins inside the south-west / north-east box, or everywhere without one."""
    markers = _place_service.get_markers(type, sw_lat, sw_lng, ne_lat, ne_lng)
    return {"success": True, "data": markers}
