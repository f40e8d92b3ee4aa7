"""Authentication API routes -- admin login and token check."""
from fastapi import APIRouter, Header, Request
from pydantic import BaseModel

from ourspots.application.auth_service import LOGIN_ENDPOINT
from ourspots.infrastructure.auth.jwt_handler import bearer_token
from ourspots.infrastructure.request_utils import get_client_ip

router = APIRouter(prefix="/api/auth", tags=["auth"])

_auth_service = None


def init_auth_routes(auth_service):
    global _auth_service
    _auth_service = auth_service


class LoginRequest(BaseModel):
    password: str | None = None


@router.post("/login")
def api_login(req: LoginRequest, request: Request):
    """Exchange the admin password for a token. Throttled per client IP."""
    token = _auth_service.authenticate(
        password=req.password,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        endpoint=LOGIN_ENDPOINT,
    )
    return {"success": True, "data": {"token": token}}


@router.get("/verify")
def api_verify(authorization: str | None = Header(default=None)):
    token = bearer_token(authorization)
    valid = token is not None and _auth_service.validate_token(token)
    return {"success": True, "data": {"valid": valid}}
