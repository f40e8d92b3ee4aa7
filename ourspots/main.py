"""Entry point. Wires repositories and rate limiters into routes.

Persistence: DATABASE_URL (PostgreSQL in production); a local SQLite file
under ./data when unset.
"""
import logging
import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ourspots.api.errors import register_exception_handlers
from ourspots.api.routes.auth_routes import router as auth_router, init_auth_routes
from ourspots.api.routes.admin_routes import router as admin_router, init_admin_routes
from ourspots.api.routes.guestbook_routes import router as guestbook_router, init_guestbook_routes
from ourspots.api.routes.map_routes import router as map_router, init_map_routes
from ourspots.api.routes.memo_routes import router as memo_router, init_memo_routes
from ourspots.api.routes.place_routes import router as place_router, init_place_routes
from ourspots.application.auth_service import AuthService
from ourspots.application.guestbook_service import GuestbookService
from ourspots.application.memo_service import MemoService
from ourspots.application.place_service import PlaceService
from ourspots.application.quota_checker import QuotaChecker
from ourspots.infrastructure.auth.bruteforce import LoginAttemptLimiter
from ourspots.infrastructure.auth.jwt_handler import JwtTokenIssuer
from ourspots.infrastructure.clock import SystemClock
from ourspots.infrastructure.database.connection import check_health, init_database
from ourspots.infrastructure.repositories.guestbook_repository import GuestbookRepository
from ourspots.infrastructure.repositories.login_attempt_repository import LoginAttemptRepository
from ourspots.infrastructure.repositories.memo_repository import MemoRepository
from ourspots.infrastructure.repositories.place_repository import PlaceRepository
from ourspots.infrastructure.throttle import WriteThrottle

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("ourspots.startup")


def _allowed_origins() -> list[str]:
    raw = os.environ.get("ALLOWED_ORIGINS", "").strip()
    if raw:
        return [o.strip() for o in raw.split(",") if o.strip()]
    # Wildcard for local development
    return ["*"]


def create_app(database_url: str | None = None, clock=None) -> FastAPI:
    """Build the application. Limiter state lives as long as the returned app."""
    clock = clock or SystemClock()
    session_factory = init_database(database_url)

    attempt_repo = LoginAttemptRepository(session_factory)
    guestbook_repo = GuestbookRepository(session_factory)
    place_repo = PlaceRepository(session_factory)
    memo_repo = MemoRepository(session_factory)

    auth_service = AuthService(
        limiter=LoginAttemptLimiter(clock),
        attempt_repo=attempt_repo,
        token_issuer=JwtTokenIssuer(),
        admin_password=os.environ.get("ADMIN_PASSWORD", ""),
    )
    guestbook_service = GuestbookService(
        repo=guestbook_repo,
        throttle=WriteThrottle(clock),
        quota=QuotaChecker(guestbook_repo, clock),
        clock=clock,
    )
    place_service = PlaceService(place_repo, clock)
    memo_service = MemoService(memo_repo, place_repo, clock)

    app = FastAPI(
        title="OurSpots API",
        description="Places, memos, map markers and guestbook for the OurSpots map.",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    init_auth_routes(auth_service)
    init_admin_routes(auth_service)
    init_guestbook_routes(guestbook_service)
    init_place_routes(place_service)
    init_memo_routes(memo_service)
    init_map_routes(place_service)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(guestbook_router)
    app.include_router(place_router)
    app.include_router(memo_router)
    app.include_router(map_router)

    app.state.auth_service = auth_service
    app.state.guestbook_service = guestbook_service
    app.state.place_service = place_service
    app.state.memo_service = memo_service
    app.state.session_factory = session_factory

    @app.get("/health")
    def health():
        return {
            "status": "online",
            "database": "connected" if check_health(session_factory.engine) else "disconnected",
        }

    logger.info("OurSpots API ready (quota timezone %s)", getattr(clock, "tz", "n/a"))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ourspots.main:app", host="0.0.0.0", port=8080, reload=True)
