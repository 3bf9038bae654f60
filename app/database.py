# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL. The engine owns the process-wide connection
pool; request handlers receive their session through the get_db dependency,
so tests can swap it with app.dependency_overrides.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings


def build_engine(url: str):
    """Create the engine; pool sizing only applies to server databases."""
    if url.startswith("sqlite"):
        # Local runs and tests: one shared connection, usable from worker threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_pre_ping=True,                                  # Auto-reconnect if DB connection drops
        pool_size=settings.PGPOOL_MAX,
        max_overflow=0,                                      # Pool is bounded
        pool_recycle=settings.PGPOOL_IDLE_TIMEOUT // 1000,
        pool_timeout=settings.PGPOOL_CONN_TIMEOUT / 1000,
        echo=False,                                          # Set True to log all SQL queries (debug only)
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency. Yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.user import User                            # noqa
    from app.models.vehicle_entry import VehicleEntry           # noqa
    from app.models.external_visitor import ExternalVisitor     # noqa
    from app.models.employee_departure import EmployeeDeparture  # noqa
    from app.models.turnstile_record import TurnstileRecord     # noqa

    Base.metadata.create_all(bind=bind or engine)
