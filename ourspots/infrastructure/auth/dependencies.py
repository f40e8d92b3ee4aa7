"""FastAPI authentication dependencies (Bearer JWT)."""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ourspots.domain.errors import UnauthorizedError
from ourspots.infrastructure.auth.jwt_handler import verify_token

_security = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(_security),
) -> dict:
    """Extract and validate the JWT from the Authorization header.

    Raises UnauthorizedError (401) on missing / invalid / expired tokens.
    """
    if not credentials:
        raise UnauthorizedError("Authentication required. Please log in.")

    payload = verify_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Session expired. Please log in again.")
    return payload


def get_optional_admin(
    credentials: HTTPAuthorizationCredentials = Depends(_security),
) -> dict | None:
    """Same as get_current_admin but returns None instead of raising."""
    if not credentials:
        return None
    return verify_token(credentials.credentials)
