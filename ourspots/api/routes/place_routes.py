"""Place API routes. Reads are public; writes need an admin token."""
from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field

from ourspots.domain.enums import PlaceType
from ourspots.domain.place import ADDRESS_MAX_LENGTH, GRADE_MAX, GRADE_MIN, NAME_MAX_LENGTH
from ourspots.infrastructure.auth.dependencies import get_current_admin

router = APIRouter(prefix="/api/places", tags=["places"])

_place_service = None


def init_place_routes(place_service):
    global _place_service
    _place_service = place_service


class PlaceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    type: PlaceType
    address: str = Field(..., min_length=1, max_length=ADDRESS_MAX_LENGTH)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    grade: int | None = Field(default=None, ge=GRADE_MIN, le=GRADE_MAX)


class PlaceUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    type: PlaceType | None = None
    address: str | None = Field(default=None, min_length=1, max_length=ADDRESS_MAX_LENGTH)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    grade: int | None = Field(default=None, ge=GRADE_MIN, le=GRADE_MAX)
    google_place_id: str | None = Field(default=None, max_length=255)
    google_rating: float | None = Field(default=None, ge=0, le=5)
    google_ratings_total: int | None = Field(default=None, ge=0)


@router.get("")
def api_list_places(type: PlaceType | None = Query(default=None)):
    return {"success": True, "data": _place_service.get_all_places(type)}


@router.get("/{place_id}")
def api_get_place(place_id: int):
    return {"success": True, "data": _place_service.get_place(place_id)}


@router.post("", status_code=201)
def api_create_place(req: PlaceCreateRequest, _admin: dict = Depends(get_current_admin)):
    place = _place_service.create_place(**req.model_dump())
    return {"success": True, "data": place}


@router.put("/{place_id}")
def api_update_place(
    place_id: int,
    req: PlaceUpdateRequest,
    _admin: dict = Depends(get_current_admin),
):
    place = _place_service.update_place(place_id, req.model_dump(exclude_none=True))
    return {"success": True, "data": place}


@router.delete("/{place_id}", status_code=204)
def api_delete_place(place_id: int, _admin: dict = Depends(get_current_admin)):
    _place_service.delete_place(place_id)
    return Response(status_code=204)
