"""Admin API routes -- lockout management and login audit trail."""
from fastapi import APIRouter, Depends, Query

from ourspots.infrastructure.auth.dependencies import get_current_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])

_auth_service = None


def init_admin_routes(auth_service):
    global _auth_service
    _auth_service = auth_service


@router.post("/unblock/{ip}")
def api_unblock(ip: str, _admin: dict = Depends(get_current_admin)):
    """Clear failure count and lockout for one IP. Safe to repeat."""
    removed = _auth_service.unblock(ip)
    return {"success": True, "data": {"ip": ip, "cleared": removed}}


@router.get("/login-attempts")
def api_login_attempts(
    ip: str = Query(..., min_length=1, max_length=255),
    _admin: dict = Depends(get_current_admin),
):
    records = _auth_service.get_attempts(ip)
    return {"success": True, "data": [r.to_dict() for r in records]}


@router.get("/blocked")
def api_blocked(_admin: dict = Depends(get_current_admin)):
    blocked = _auth_service.blocked_ips()
    return {
        "success": True,
        "data": [
            {"ip": ip, "blocked_until": until.isoformat()}
            for ip, until in sorted(blocked.items())
        ],
    }
