"""JWT token creation and verification (HS256)."""
import os
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from ourspots.infrastructure.env import env_int

SECRET_KEY = os.environ.get("JWT_SECRET_KEY")

# A None key makes python-jose sign with the string "None"; every token
# would be forgeable.
if not SECRET_KEY:  # pragma: no cover
    raise RuntimeError(
        "Missing JWT_SECRET_KEY environment variable. "
        "Add JWT_SECRET_KEY=<strong-random-value> to your .env file before starting."
    )

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = env_int("JWT_EXPIRATION_HOURS", 24)
ADMIN_SUBJECT = "admin"


def create_access_token(subject: str = ADMIN_SUBJECT, expire_hours: int | None = None) -> str:
    """Create a signed access token (24 h default)."""
    now = datetime.now(timezone.utc)
    hours = expire_hours if expire_hours is not None else ACCESS_TOKEN_EXPIRE_HOURS
    payload = {
        "sub": subject,
        "type": "access",
        "exp": now + timedelta(hours=hours),
        "iat": now,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and validate a JWT. Returns the payload dict or None."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None or payload.get("type") != "access":
        return None
    return payload


def bearer_token(auth_header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[len("Bearer "):].strip() or None


def is_valid_auth_header(auth_header: str | None) -> bool:
    token = bearer_token(auth_header)
    return token is not None and verify_token(token) is not None


class JwtTokenIssuer:
    """Token issuer handed to AuthService. Tokens are opaque to the caller."""

    def issue(self) -> str:
        return create_access_token()

    def verify(self, token: str) -> bool:
        return verify_token(token) is not None
