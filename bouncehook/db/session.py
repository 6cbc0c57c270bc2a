"""SQLAlchemy session handling utilities."""
from __future__ import annotations

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from bouncehook.core.config import settings

# The engine is created once and reused for all requests.
db_url = make_url(settings.database_url)
connect_args = {}
if db_url.drivername.startswith("postgresql+psycopg"):
    connect_args["sslmode"] = "require"
elif db_url.drivername.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool.
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    future=True,
    pool_pre_ping=True,
    connect_args=connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency that yields a scoped session."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
