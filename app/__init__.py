"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    SmartMealError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    NotAuthenticatedError,
    FetchFailureError,
    WriteFailureError,
)

__all__ = [
    "settings",
    "SmartMealError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "NotAuthenticatedError",
    "FetchFailureError",
    "WriteFailureError",
]
