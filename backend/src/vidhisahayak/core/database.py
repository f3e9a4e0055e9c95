"""
Database service for VidhiSahayak.

Provides connection management and transaction handling for the chat history,
user and lawyer tables. Persistence is optional: without ``DATABASE_URL`` the
engine is not created and callers receive ``None`` sessions.
"""

import logging
from typing import Generator, Optional
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError
from fastapi import Depends, HTTPException, status

from vidhisahayak.core.config import get_config

config = get_config()
logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine with settings suited to the backend behind the URL."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=config.application.debug, **kwargs)

    return create_engine(
        database_url,
        pool_size=config.database.db_pool_size,
        max_overflow=config.database.db_max_overflow,
        pool_timeout=config.database.db_pool_timeout,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,   # Recycle connections every hour
        echo=config.application.debug,
    )


engine: Optional[Engine] = build_engine(config.database.database_url) if config.database.is_configured else None

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine is not None else None


def is_persistence_enabled() -> bool:
    """Whether a database is configured."""
    return SessionLocal is not None


def get_db() -> Generator[Optional[Session], None, None]:
    """
    Get database session with proper error handling and cleanup.

    Yields:
        Database session, or None when no database is configured

    Raises:
        SQLAlchemyError: If database connection fails
    """
    if SessionLocal is None:
        yield None
        return

    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    except Exception as e:
        logger.error(f"Unexpected error in database session: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def require_db(db: Optional[Session] = Depends(get_db)) -> Session:
    """Return the session or fail with 503 when persistence is disabled."""
    if db is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not configured",
        )
    return db


def create_tables():
    """Create all database tables."""
    if engine is None:
        logger.info("No database configured, skipping table creation")
        return
    try:
        # Import all models to ensure they are registered with SQLAlchemy
        from vidhisahayak.models import Base
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database tables: {e}")
        raise


def check_database_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        True if connection is successful, False otherwise
    """
    if engine is None:
        return False
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection check successful")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False


if engine is not None:
    @event.listens_for(engine, "connect")
    def set_connection_parameters(dbapi_connection, connection_record):
        """Set per-connection parameters."""
        if engine.dialect.name == "postgresql":
            with dbapi_connection.cursor() as cursor:
                # Set statement timeout (1 minute)
                cursor.execute("SET statement_timeout = '60s'")
        elif engine.dialect.name == "sqlite":
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Log SQL queries in debug mode."""
        if config.application.debug:
            logger.debug(f"SQL Query: {statement}")


def initialize_database():
    """Initialize database connection and create tables if needed."""
    if engine is None:
        logger.info("DATABASE_URL not set - running without persistence")
        return

    try:
        # Check connection
        if not check_database_connection():
            raise RuntimeError("Database connection failed")

        # Create tables if they don't exist
        create_tables()

        logger.info("Database initialized successfully")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
