# backend/consultation_portal/repositories/user_repository.py
"""
User Repository for the consultation portal

Identity store for accounts: lookups by id and email plus the
persistence helpers used by registration and profile updates.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access."""

    def __init__(self, db: Session):
        """Initialize with User model."""
        super().__init__(db, User)
        self.logger = logging.getLogger(__name__)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (emails are stored lowercased)."""
        try:
            return self.db.query(User).filter(User.email == email.strip().lower()).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email: {str(e)}")
            raise RepositoryException(f"Failed to retrieve user: {str(e)}") from e

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def link_faculty_profile(self, user_id: str, faculty_profile_id: str) -> Optional[User]:
        """Attach a faculty profile to its owning account."""
        return self.update(user_id, faculty_profile_id=faculty_profile_id)
