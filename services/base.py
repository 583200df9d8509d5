"""Helpers shared by the service classes"""

from datetime import date
from typing import Optional, Union
from uuid import UUID

from app.exceptions import NotAuthenticatedError, ServiceValidationError


def require_user(user_id: Optional[UUID]) -> UUID:
    """Return the current user id or raise NotAuthenticatedError."""
    if user_id is None:
        raise NotAuthenticatedError()
    return user_id


def parse_date(value: Union[date, str], field: str = "date") -> date:
    """Accept a date or an ISO-8601 calendar date string (YYYY-MM-DD)."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ServiceValidationError(
            f"Invalid {field}: expected YYYY-MM-DD", details={field: value}
        )
