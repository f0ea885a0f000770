"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

import logging
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar, Optional, Type
from uuid import UUID

from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError
from sqlalchemy.orm import Session
from abc import ABC

from app.exceptions import UnavailableError

ModelType = TypeVar("ModelType")

logger = logging.getLogger("pizzeria.repositories")


@contextmanager
def store_errors(db: Session, operation: str) -> Iterator[None]:
    """
    Translate connectivity failures of the store into UnavailableError.

    The session is rolled back so it can be closed cleanly. Integrity and
    programming errors are left alone for the caller to handle.
    """
    try:
        yield
    except (OperationalError, InterfaceError, TimeoutError) as e:
        logger.error(f"Store failure during {operation}: {e}")
        try:
            db.rollback()
        except (OperationalError, InterfaceError):
            logger.warning(f"Rollback after failed {operation} also failed")
        raise UnavailableError(
            f"Data store unavailable during {operation}",
            details={"operation": operation},
        ) from e


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common lookups.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """
        Get entity by ID.

        Subclasses override this with their specific ID field
        (ingredient_id, pizza_id).
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement get_by_id() with specific ID field"
        )
