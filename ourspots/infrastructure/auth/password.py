"""Admin password check -- bcrypt hash or plain configured secret."""
import secrets

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt (for generating ADMIN_PASSWORD)."""
    return bcrypt.hashpw(
        plain.encode("utf-8"), bcrypt.gensalt(rounds=12)
    ).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def is_bcrypt_hash(hashed: str) -> bool:
    """Return True if the hash string looks like a bcrypt hash."""
    return hashed.startswith("$2b$") or hashed.startswith("$2a$")


def matches_configured_secret(candidate: str | None, configured: str | None) -> bool:
    """Compare a login candidate with the configured admin secret.

    Empty candidates and an unset secret never match.
    """
    if not candidate or not configured:
        return False
    if is_bcrypt_hash(configured):
        return verify_password(candidate, configured)
    return secrets.compare_digest(candidate.encode("utf-8"), configured.encode("utf-8"))
