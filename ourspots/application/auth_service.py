"""Admin authentication guarded by the per-IP brute-force limiter."""
import logging
from typing import List

from ourspots.domain.errors import UnauthorizedError
from ourspots.domain.login_attempt import AttemptRecord
from ourspots.infrastructure.auth.password import matches_configured_secret

logger = logging.getLogger("ourspots.auth")

LOGIN_ENDPOINT = "/api/auth/login"


class AuthService:
    """Checks the admin secret and issues tokens.

    The limiter's in-memory counter decides lockouts. The attempt repository
    is a write-only audit trail: a failed append is logged and never changes
    the outcome of the login.
    """

    def __init__(self, limiter, attempt_repo, token_issuer, admin_password: str | None):
        self._limiter = limiter
        self._attempts = attempt_repo
        self._tokens = token_issuer
        self._admin_password = admin_password or ""
        if not self._admin_password:
            logger.warning("ADMIN_PASSWORD is not set; every login will fail.")

    def authenticate(
        self,
        password: str | None,
        ip_address: str,
        user_agent: str | None = None,
        endpoint: str = LOGIN_ENDPOINT,
    ) -> str:
        """Return a fresh token, or raise UnauthorizedError / TooManyAttemptsError."""
        self._limiter.check(ip_address)

        if not matches_configured_secret(password, self._admin_password):
            state = self._limiter.record_failure(ip_address)
            self._append_attempt(
                AttemptRecord(
                    ip_address=ip_address,
                    user_agent=user_agent,
                    endpoint=endpoint,
                    attempt_count=state.count,
                    blocked=state.blocked_until is not None,
                )
            )
            raise UnauthorizedError("Unauthorized. Check the admin password.")

        self._limiter.record_success(ip_address)
        return self._tokens.issue()

    def _append_attempt(self, record: AttemptRecord) -> None:
        try:
            self._attempts.append(record)
        except Exception:
            logger.error(
                "Could not persist failed login from %s (count=%d)",
                record.ip_address, record.attempt_count, exc_info=True,
            )

    def validate_token(self, token: str) -> bool:
        return self._tokens.verify(token)

    def unblock(self, ip_address: str) -> bool:
        return self._limiter.unblock(ip_address)

    def get_attempts(self, ip_address: str) -> List[AttemptRecord]:
        return self._attempts.find_by_ip(ip_address)

    def blocked_ips(self) -> dict:
        return self._limiter.blocked_keys()
