"""
Infrastructure layer: SQLAlchemy engine and session management.
"""
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from rootly.config import settings

# Shared declarative base, imported by all ORM tables
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for the plant database.

    SQLite connections are shared with Starlette's threadpool, so the
    same-thread check is disabled. In-memory databases use a single
    static connection, otherwise every connection would see an empty
    database.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Engine instance
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


engine = create_db_engine(settings.database_url)
SessionLocal = create_session_factory(engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    # Register the tables on Base.metadata
    from rootly.infrastructure import orm  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """
    Yield a database session and close it afterwards.

    Used as a FastAPI dependency.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
