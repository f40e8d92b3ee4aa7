"""Domain error vocabulary shared by services and the HTTP boundary."""
from datetime import datetime

from ourspots.domain.enums import LimitScope


class OurSpotsError(Exception):
    """Base class. Every subclass maps to one HTTP status and a stable kind."""

    status_code = 500
    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message, "kind": self.kind}


class UnauthorizedError(OurSpotsError):
    status_code = 401
    kind = "unauthorized"


class NotFoundError(OurSpotsError):
    status_code = 404
    kind = "not_found"


class InvalidRequestError(OurSpotsError):
    """Input rejected by a domain rule after the HTTP layer accepted it."""

    status_code = 400
    kind = "invalid_request"


class ConflictError(OurSpotsError):
    status_code = 409
    kind = "conflict"


class TooManyAttemptsError(OurSpotsError):
    """Rejected by a lockout, a cooldown or a daily cap.

    ``scope`` tells the caller which rule fired; ``retry_at`` is set when the
    earliest retry time is known.
    """

    status_code = 429
    kind = "too_many_attempts"

    def __init__(
        self,
        message: str,
        scope: LimitScope,
        retry_at: datetime | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.scope = scope
        self.retry_at = retry_at
        self.limit = limit

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["scope"] = self.scope.value
        if self.retry_at is not None:
            data["retry_at"] = self.retry_at.isoformat()
        if self.limit is not None:
            data["limit"] = self.limit
        return data


class InternalError(OurSpotsError):
    """Unexpected collaborator failure."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code
