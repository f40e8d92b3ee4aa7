"""Memo API routes -- listed under a place, edited by id."""
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from ourspots.domain.enums import Rating
from ourspots.domain.memo import COMMENT_MAX_LENGTH, ITEM_NAME_MAX_LENGTH
from ourspots.infrastructure.auth.dependencies import get_current_admin

router = APIRouter(prefix="/api", tags=["memos"])

_memo_service = None


def init_memo_routes(memo_service):
    global _memo_service
    _memo_service = memo_service


class MemoCreateRequest(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=ITEM_NAME_MAX_LENGTH)
    rating: Rating
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)


class MemoUpdateRequest(BaseModel):
    item_name: str | None = Field(default=None, min_length=1, max_length=ITEM_NAME_MAX_LENGTH)
    rating: Rating | None = None
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)


@router.get("/places/{place_id}/memos")
def api_list_memos(place_id: int):
    return {"success": True, "data": _memo_service.get_memos_by_place(place_id)}


@router.post("/places/{place_id}/memos", status_code=201)
def api_create_memo(
    place_id: int,
    req: MemoCreateRequest,
    _admin: dict = Depends(get_current_admin),
):
    memo = _memo_service.create_memo(place_id, req.item_name, req.rating, req.comment)
    return {"success": True, "data": memo}


@router.put("/memos/{memo_id}")
def api_update_memo(
    memo_id: int,
    req: MemoUpdateRequest,
    _admin: dict = Depends(get_current_admin),
):
    memo = _memo_service.update_memo(memo_id, req.item_name, req.rating, req.comment)
    return {"success": True, "data": memo}


@router.delete("/memos/{memo_id}", status_code=204)
def api_delete_memo(memo_id: int, _admin: dict = Depends(get_current_admin)):
    _memo_service.delete_memo(memo_id)
    return Response(status_code=204)
