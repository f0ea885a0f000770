"""
API dependencies for dependency injection
"""

from typing import Generator
from fastapi import Request
from sqlalchemy.orm import Session

from app.exceptions import UnavailableError
from domain.models import Database


def get_database(request: Request) -> Database:
    """The Database handle attached to the application by the lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_connected:
        raise UnavailableError("Database not initialized")
    return database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_database(request).get_session()
