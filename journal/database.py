"""SQLModel database engine and session management.

The engine is a process-wide handle: created once by ``init_engine`` (called
from the app lifespan, or lazily on first use) and handed to request handlers
through the ``get_session`` dependency.
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from journal.config import settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None


def _build_engine(database_url: str) -> Engine:
    kwargs = {"echo": False}
    # SQLite needs check_same_thread=False; PostgreSQL does not
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live in one connection; share it across threads
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def init_engine(database_url: str | None = None) -> Engine:
    """Create the process-wide engine, replacing any existing one."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    url = database_url or settings.database_url
    _engine = _build_engine(url)
    logger.info(f"Database engine initialised ({_engine.url.get_backend_name()})")
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        return init_engine()
    return _engine


def dispose_engine():
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None


def create_db_and_tables():
    """Create all tables. Called on startup."""
    # Models must be imported so their tables are registered on the metadata
    import journal.models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(get_engine()) as session:
        yield session
