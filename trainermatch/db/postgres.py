"""
Relational store connection utility.

One SQLAlchemy engine (and its connection pool) per process, created on first
use and disposed on application shutdown. PostgreSQL in deployment; any
SQLAlchemy URL (e.g. in-memory SQLite for tests) via DATABASE_URL.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from trainermatch.core.config import get_settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _build_engine(url: str) -> Engine:
    settings = get_settings()

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live inside one connection, share it across threads
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=settings.debug, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_fks(dbapi_connection, connection_record):
            cur = dbapi_connection.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.close()

        return engine

    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug
    )


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first call."""
    global _engine, _session_factory
    if _engine is None:
        with _lock:
            if _engine is None:
                _engine = _build_engine(get_settings().sqlalchemy_url)
                _session_factory = sessionmaker(
                    bind=_engine, autocommit=False, autoflush=False, expire_on_commit=False
                )
    return _engine


def SessionLocal() -> Session:
    """Create a new session bound to the shared engine."""
    get_engine()
    return _session_factory()


def dispose_engine() -> None:
    """Close all pooled connections (application shutdown)."""
    global _engine, _session_factory
    with _lock:
        if _engine is not None:
            _engine.dispose()
            logger.info("Relational engine disposed")
        _engine = None
        _session_factory = None


def init_db() -> None:
    """Create all tables that don't exist yet."""
    from trainermatch.models import Base

    Base.metadata.create_all(bind=get_engine())


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(select(User))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI route injection.
    Commits when the handler returns, rolls back on error.
    Usage:
        @router.get("/users")
        def get_users(db: Session = Depends(get_db)):
            ...
    """
    with get_db_session() as session:
        yield session


def test_postgres_connection() -> bool:
    """
    Test if the relational store is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("Relational store connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    Handy for ad-hoc maintenance queries.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]
