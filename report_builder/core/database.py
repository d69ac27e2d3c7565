# report_builder/core/database.py
"""Database configuration for the request log store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from report_builder.core.config import LOG_DATABASE_URL


def _engine_options(url: str) -> dict:
    options: dict = {}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite lives on a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
    return options


engine = create_engine(LOG_DATABASE_URL, **_engine_options(LOG_DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Get log database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all_tables():
    """Create the log tables."""
    # Import models to ensure they're registered with Base
    from report_builder.logging.models import Log  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_db():
    """Initialize the log database."""
    create_all_tables()
