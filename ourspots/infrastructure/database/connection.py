"""Database engine and session factory.

DATABASE_URL selects the backend (PostgreSQL in production, SQLite for local
runs and tests). Every connection carries DB_TIMEOUT_SECONDS as pool checkout
timeout, connect timeout and, on PostgreSQL, statement timeout, so no durable
call can block a request indefinitely.
"""
import logging
import os
import re
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ourspots.infrastructure.env import env_int

logger = logging.getLogger("ourspots.db")

DEFAULT_DATABASE_URL = "sqlite:///./data/ourspots.db"
DB_TIMEOUT_SECONDS = env_int("DB_TIMEOUT_SECONDS", 5)

# Matches a postgres(ql):// URL anywhere inside a string.
_PG_URL_RE = re.compile(r"(postgres(?:ql)?://\S+)")


def resolve_database_url(env_var: str = "DATABASE_URL") -> str:
    """Read a database URL from environment and return a clean SQLAlchemy URL.

    Handles robustly:
    - Leading/trailing whitespace or newlines from copy-paste.
    - Literal surrounding quotes pasted in dashboards.
    - Full ``psql`` command pasted instead of just the URL.
    - ``postgres://`` scheme that SQLAlchemy rejects (needs ``postgresql://``).
    Falls back to the local SQLite file when unset.
    """
    raw = os.environ.get(env_var, "").strip()

    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
        raw = raw[1:-1].strip()

    if not raw:
        return DEFAULT_DATABASE_URL

    match = _PG_URL_RE.search(raw)
    url = match.group(1) if match else raw
    url = url.rstrip("'\"").strip()

    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return url


def _masked(url: str) -> str:
    try:
        return url.split("@")[-1].split("?")[0] if "@" in url else url.split("://")[0]
    except Exception:
        return "<parse-error>"


def build_engine(url: str, timeout: int | None = None):
    """Create a SQLAlchemy engine with bounded timeouts for *url*."""
    timeout = timeout if timeout is not None else DB_TIMEOUT_SECONDS
    parsed = make_url(url)
    logger.info("Initialising database engine -> %s", _masked(url))

    if parsed.get_backend_name() == "sqlite":
        database = parsed.database
        if database and database != ":memory:":
            directory = os.path.dirname(os.path.abspath(database))
            os.makedirs(directory, exist_ok=True)
            return create_engine(
                url,
                connect_args={"check_same_thread": False, "timeout": timeout},
                echo=False,
            )
        # In-memory: one shared connection so every session sees the same tables
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        url,
        pool_size=3,
        max_overflow=5,
        pool_timeout=timeout,
        pool_recycle=1800,
        pool_pre_ping=True,
        connect_args={
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        },
        echo=False,
    )


def create_tables(engine) -> None:
    """Create all tables (idempotent)."""
    from ourspots.infrastructure.database.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Tables verified.")


def check_health(engine) -> bool:
    """Lightweight connectivity check for an engine."""
    if engine is None:
        return False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
        return False


class SessionFactory:
    """Callable passed to repositories.

    Usage:
        with session_factory() as session:
            ...
    Rolls back on any error and always closes the session.
    """

    def __init__(self, engine):
        self.engine = engine
        self._sessionmaker = sessionmaker(bind=engine, expire_on_commit=False)

    def __call__(self):
        return self._managed_session()

    @contextmanager
    def _managed_session(self):
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def init_database(url: str | None = None) -> SessionFactory:
    """Build the engine for *url* (or DATABASE_URL), create tables, return a factory."""
    engine = build_engine(url or resolve_database_url())
    create_tables(engine)
    return SessionFactory(engine)
