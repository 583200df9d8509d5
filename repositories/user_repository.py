"""
User Repository - Data access layer for user accounts
"""

from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError
from repositories.base import BaseRepository
from domain.models import AppUser


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email"""
        return self.db.query(AppUser).filter(AppUser.email == email).first()

    def create_user(self, email: str, full_name: Optional[str] = None) -> AppUser:
        """Create a new user; emails are unique"""
        try:
            return self.create(AppUser(email=email, full_name=full_name))
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User with email {email} already exists")
