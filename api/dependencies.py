"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from domain.models import get_db_session
from repositories.store import MealPlanningStore, SqlMealPlanningStore


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_current_user_id(
    x_user_id: Optional[UUID] = Header(
        default=None, description="Authenticated user id, set by the auth proxy"
    ),
) -> Optional[UUID]:
    """
    Current user as asserted by the upstream auth layer.

    Returns None when the header is absent; services raise
    NotAuthenticatedError for operations that need a user.
    """
    return x_user_id


def get_store(
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Depends(get_current_user_id),
) -> MealPlanningStore:
    """Store bound to the request session and current user"""
    return SqlMealPlanningStore(db, current_user_id=user_id)
