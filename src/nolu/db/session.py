"""Database session management.

Provides session factory for SQLite database access with proper
thread-safety for FastAPI concurrency.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from nolu.db.schema import Base

logger = logging.getLogger(__name__)

# Default database path, overridable with NOLU_DB_PATH
DEFAULT_DB_PATH = Path("data/nolu.db")

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def resolve_db_path(db_path: Path | None = None) -> Path:
    """Resolve the database path from argument, environment or default."""
    if db_path is not None:
        return Path(db_path)
    env_path = os.environ.get("NOLU_DB_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_PATH


def get_engine(db_path: Path | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path to enable connection pooling.
    Subsequent calls with the same path return the cached engine.

    Uses StaticPool and check_same_thread=False for SQLite thread-safety
    under FastAPI concurrency.

    Args:
        db_path: Path to SQLite database file. Defaults to NOLU_DB_PATH
            or data/nolu.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    db_path = resolve_db_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    # Create parent directories only when creating a new engine
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # StaticPool shares one connection across sessions, so concurrent
    # requests also share a transaction. Fine for a single-worker deployment.
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engine_cache[cache_key] = engine
    logger.info(f"Opened database at {db_path}")

    return engine


def _get_session_factory(db_path: Path | None = None) -> sessionmaker:
    """Get cached session factory for the database."""
    db_path = resolve_db_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _session_factory_cache:
        return _session_factory_cache[cache_key]

    engine = get_engine(db_path)
    factory = sessionmaker(bind=engine)
    _session_factory_cache[cache_key] = factory

    return factory


def get_session(db_path: Path | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session.
    """
    factory = _get_session_factory(db_path)
    return factory()


def init_db(db_path: Path | None = None) -> None:
    """Initialize database schema.

    Call this once during application startup to create tables.
    """
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)


def check_connection(session: Session) -> bool:
    """Return True if the database answers a trivial query."""
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return False
    return True
