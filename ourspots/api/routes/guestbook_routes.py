"""Guestbook API routes."""
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field, field_validator

from ourspots.domain.guestbook import CONTENT_MAX_LENGTH, NICKNAME_MAX_LENGTH
from ourspots.infrastructure.auth.dependencies import get_optional_admin
from ourspots.infrastructure.request_utils import get_client_ip

router = APIRouter(prefix="/api/guestbook", tags=["guestbook"])

_guestbook_service = None


def init_guestbook_routes(guestbook_service):
    global _guestbook_service
    _guestbook_service = guestbook_service


class GuestbookCreateRequest(BaseModel):
    nickname: str | None = Field(default=None, max_length=NICKNAME_MAX_LENGTH)
    content: str = Field(..., max_length=CONTENT_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please enter a message.")
        return value


@router.get("")
def api_list_messages(request: Request, admin: dict | None = Depends(get_optional_admin)):
    messages = _guestbook_service.get_messages(get_client_ip(request), admin is not None)
    return {"success": True, "data": messages}


@router.post("")
def api_create_message(req: GuestbookCreateRequest, request: Request):
    message = _guestbook_service.create_message(
        content=req.content,
        nickname=req.nickname,
        client_ip=get_client_ip(request),
    )
    return {"success": True, "data": message}


@router.delete("/{message_id}", status_code=204)
def api_delete_message(
    message_id: int,
    request: Request,
    admin: dict | None = Depends(get_optional_admin),
):
    _guestbook_service.delete_message(message_id, get_client_ip(request), admin is not None)
    return Response(status_code=204)
