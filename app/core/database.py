"""
Database configuration and session management
Handles engine setup, sessions and health checks
"""

import logging
import time
from typing import Generator

import sentry_sdk
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def build_engine(database_url: str, **kwargs):
    """Create an engine with settings suited to the backend in use"""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", 10)
        kwargs.setdefault("max_overflow", 20)
        kwargs.setdefault("pool_recycle", 3600)
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(database_url, echo=settings.DEBUG, **kwargs)


engine = build_engine(settings.get_database_url())

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db() -> None:
    """Initialize database, create tables if they don't exist"""
    try:
        # Import all models here to ensure they're registered
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")

        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            if result.scalar() == 1:
                logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        if settings.SENTRY_DSN:
            sentry_sdk.capture_exception(e)
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session
    Ensures proper cleanup after request
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error occurred: {e}")
        db.rollback()
        if settings.SENTRY_DSN:
            sentry_sdk.capture_exception(e)
        raise
    finally:
        db.close()


class DatabaseHealthCheck:
    """Database health check utility"""

    @staticmethod
    def check_connection(db: Session) -> dict:
        """Check database connection health"""
        start_time = time.time()
        try:
            result = db.execute(text("SELECT 1"))
            if result.scalar() == 1:
                return {
                    "status": "healthy",
                    "response_time": time.time() - start_time,
                }
            return {"status": "unhealthy", "response_time": time.time() - start_time}
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "response_time": time.time() - start_time,
            }
