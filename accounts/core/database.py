"""
Database configuration and session management.

This module provides the SQLAlchemy engine, the session factory, a transaction
context manager and the per-request session dependency.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from .config import settings

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """
    Build the database URL from the DB_TYPE setting.

    Returns:
        str: SQLAlchemy database URL
    """
    if settings.DB_TYPE == "mysql":
        return (
            f"mysql+pymysql://{settings.MYSQL_USER}:{settings.MYSQL_PASSWORD}@"
            f"{settings.MYSQL_HOST}:{settings.MYSQL_PORT}/{settings.MYSQL_DB}"
        )
    return f"sqlite:///{settings.SQLITE_DB}"


def _engine_options() -> dict:
    if settings.DB_TYPE == "mysql":
        return {
            "pool_pre_ping": True,  # Enable automatic reconnection
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 1800,  # Recycle connections after 30 minutes
        }
    return {"connect_args": {"check_same_thread": False}}


engine = create_engine(get_database_url(), echo=False, **_engine_options())

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False  # Prevent expired object access after commit
)

# Create Base class for declarative models
Base = declarative_base()


# PUBLIC_INTERFACE
@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Context manager that commits on success and rolls back on any error.

    Args:
        session (Session): SQLAlchemy session instance

    Yields:
        Session: The active database session

    Raises:
        SQLAlchemyError: If any database operation fails
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Get database session with automatic cleanup.

    Yields:
        Session: Database session

    Note:
        This function should be used as a FastAPI dependency.
        The session is automatically closed after the request is completed.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Models must be imported so they register on Base.metadata
    from accounts.models import user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialised ({settings.DB_TYPE})")
