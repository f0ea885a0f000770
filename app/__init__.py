"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    PizzeriaError,
    ServiceValidationError,
    InvalidCompositionError,
    NotFoundError,
    ConflictError,
    UnavailableError,
)

__all__ = [
    "settings",
    "PizzeriaError",
    "ServiceValidationError",
    "InvalidCompositionError",
    "NotFoundError",
    "ConflictError",
    "UnavailableError",
]
