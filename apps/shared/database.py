"""
Database configuration and session management

Provides the SQLAlchemy engine, the session factory and the FastAPI
dependency that hands one session to each request. Models live in
apps/blog/models.py and register themselves on ``Base``.
"""

import os
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

# Get database URL from environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://backend_user:changeme@db:5432/backend_db")

# Using NullPool for better compatibility with containerized environments
engine = create_engine(
    DATABASE_URL,
    poolclass=NullPool,
    echo=False,  # Set to True for SQL query logging during development
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency injection for database sessions

    The session is shared by every store built for the same request, so
    writes made through several stores are committed (or rolled back)
    together:

    @router.post("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        ...
        db.commit()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables for every model registered on Base."""
    # Import for side effects: registers Blog and User on Base.metadata
    import apps.blog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")


def check_db_connection() -> bool:
    """
    Test database connectivity
    Returns True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
