"""
Database session management for AI Studio
SQLAlchemy setup shared by the API and the chat relay
"""

from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from backend.config import settings

# SQLite needs cross-thread access because FastAPI runs sync dependencies
# in a threadpool
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

# Create database engine
# pool_pre_ping: Verify connections before using them
# echo: Log all SQL statements when DATABASE_ECHO=True
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DATABASE_ECHO,
    connect_args=connect_args
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI endpoints to get database session
    Automatically closes session after request

    Rolls back on exceptions so a failed request never leaves a dirty
    session behind
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        # Rollback any pending transaction on error
        db.rollback()
        raise
    finally:
        db.close()


def get_session_factory():
    """
    Dependency returning the session factory

    The chat relay opens its own short-lived session for the assistant
    message because that write happens after the response has been sent.
    """
    return SessionLocal


def create_tables():
    """
    Create all tables in the database
    Called during application startup

    Note: Import models here to ensure they're registered with Base.metadata
    """
    # Import models so they're registered with Base.metadata
    from backend.models import User, AccessToken, Project, File, ChatMessage, UserApiKey  # noqa: F401

    Base.metadata.create_all(bind=engine)


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used as the Python-side column default"""
    return datetime.now(timezone.utc)
