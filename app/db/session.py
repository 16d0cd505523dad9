"""
Database engine and request-scoped sessions.

SQLite URLs (local development, tests) need ``check_same_thread`` off
because FastAPI runs sync endpoints in a thread pool; PostgreSQL gets a
pre-pinged connection pool.
"""

from typing import Any, Generator

from sqlmodel import Session, create_engine

from app.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG, **_engine_options(settings.DATABASE_URL))


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        SQLModel Session, closed when the request finishes
    """
    with Session(engine) as session:
        yield session
