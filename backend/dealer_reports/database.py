"""Database connection, session management, and table initialization.

Uses lazy initialization so importing this module does NOT trigger
Settings() or engine creation at import time — important for testing
and IDE import resolution.

Report rows are written with database-level upserts, so this module also
exposes the dialect-specific ``INSERT`` construct used by the repositories.
"""

from typing import Any, Callable, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from dealer_reports.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""
    pass


def build_engine(database_url: str, echo: bool = False):
    """Create a SQLAlchemy engine.

    SQLite gets check_same_thread=False for FastAPI's threaded request
    handling.  Server databases run at READ COMMITTED so each aggregation
    reads a committed snapshot of the sale and finance tables.
    """
    connect_args = {}
    kwargs: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    else:
        kwargs["isolation_level"] = "READ COMMITTED"
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)


def build_session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def dialect_insert(db: Session) -> Optional[Callable]:
    """Return the ``insert`` construct supporting ON CONFLICT for this session.

    Returns None for dialects without ``on_conflict_do_update`` (callers
    fall back to ``Session.merge``).
    """
    name = db.get_bind().dialect.name
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    return None


# ---------------------------------------------------------------------------
# Lazy application-level singletons (created on first access, not at import)
# ---------------------------------------------------------------------------

_engine = None
_SessionLocal = None


def _get_engine():
    """Return the application-level engine, creating it on first call."""
    global _engine
    if _engine is None:
        settings = Settings()
        _engine = build_engine(settings.database_url, echo=settings.debug)
    return _engine


def _get_session_factory():
    """Return the application-level session factory, creating it on first call."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = build_session_factory(_get_engine())
    return _SessionLocal


def get_db():
    """FastAPI dependency that yields a database session per request."""
    db = _get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the sale, finance, report and tracker tables if missing."""
    import dealer_reports.models  # noqa: F401
    Base.metadata.create_all(bind=_get_engine())
