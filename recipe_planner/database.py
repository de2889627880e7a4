"""Database engine, session scopes, and schema helpers."""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        # In-memory SQLite only lives as long as its one connection
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": 5, "max_overflow": 10, "pool_pre_ping": True}


def create_db_engine():
    """Create the SQLAlchemy engine for the configured DATABASE_URL."""
    database_url = get_settings().database_url
    return create_engine(database_url, **_engine_options(database_url))


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """One unit of work: commit on success, roll back on any exception.

    Usage:
        with session_scope() as db:
            db.add(...)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: a request runs inside a single session_scope."""
    with session_scope() as db:
        yield db


def create_tables() -> None:
    """Create any mapped table that is missing (no migrations involved)."""
    from .models import Base

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    from .models import Base

    Base.metadata.drop_all(bind=engine)


def check_database_health() -> bool:
    """Run a trivial query; False if the database cannot be reached."""
    try:
        with session_scope() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def list_tables() -> list[str]:
    try:
        return inspect(engine).get_table_names()
    except Exception as e:
        logger.error(f"Failed to list tables: {e}")
        return []


def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    engine.dispose()
