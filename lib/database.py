# =============================================================================
# lib/database.py - Database Engine and Schema Bootstrap
# =============================================================================
# Creates the SQLModel engine from Settings, creates the users table if it
# is missing, and checks that the database answers a trivial query.
#
# Nothing here terminates the process. Failures raise DatabaseInitError and
# the caller (app lifespan, scripts/init_db.py) decides whether to abort.
#
# Usage:
#   from lib.database import init_database
#   engine = init_database(settings)
# =============================================================================

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.config import Settings
from app.exceptions import DatabaseInitError

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """
    Build the SQLAlchemy engine for the configured database.

    SQLite gets the thread and pooling options the API needs; an in-memory
    SQLite URL shares a single connection so every session sees the same data.

    Args:
        settings: Application settings

    Returns:
        Engine bound to settings.database_url
    """
    url = settings.database_url
    engine_kwargs: dict = {"echo": False}

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["connect_args"] = {"connect_timeout": 10}

    return create_engine(url, **engine_kwargs)


def create_schema(engine: Engine) -> None:
    """
    Create the users table if it doesn't exist.

    Safe to call on every startup.
    """
    # Registers the table on SQLModel.metadata
    from core.models.user import User  # noqa: F401

    SQLModel.metadata.create_all(engine)


def check_connection(engine: Engine) -> bool:
    """Run SELECT 1 against the database."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return True


def init_database(settings: Settings) -> Engine:
    """
    Connect to the database and bootstrap the schema.

    Args:
        settings: Application settings

    Returns:
        Ready-to-use Engine

    Raises:
        DatabaseInitError: If the engine can't be created, the schema can't
            be created, or the database doesn't answer
    """
    try:
        engine = create_db_engine(settings)
    except (SQLAlchemyError, ValueError, ImportError) as e:
        raise DatabaseInitError(f"invalid database configuration: {e}")

    try:
        create_schema(engine)
        check_connection(engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseInitError(str(e))

    logger.info(f"Database ready ({engine.url.get_backend_name()} at {engine.url.host or 'local'})")
    return engine
