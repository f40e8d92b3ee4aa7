"""Render domain errors as the JSON error envelope."""
import logging
import math
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ourspots.domain.errors import OurSpotsError, TooManyAttemptsError

logger = logging.getLogger("ourspots.api")


def retry_after_seconds(retry_at: datetime, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    return max(0, math.ceil((retry_at - now).total_seconds()))


async def handle_domain_error(request: Request, exc: OurSpotsError) -> JSONResponse:
    headers = {}
    if isinstance(exc, TooManyAttemptsError) and exc.retry_at is not None:
        headers["Retry-After"] = str(retry_after_seconds(exc.retry_at))
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": ", ".join(parts), "kind": "invalid_request"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "kind": "internal"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OurSpotsError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
