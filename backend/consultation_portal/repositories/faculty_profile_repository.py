# backend/consultation_portal/repositories/faculty_profile_repository.py
"""
Faculty Profile Repository for the consultation portal

Handles data access for faculty profiles with the owning account
eager loaded, since every directory view needs the name and email.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.faculty import FacultyProfile
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class FacultyProfileRepository(BaseRepository[FacultyProfile]):
    """Repository for faculty profile data access."""

    def __init__(self, db: Session):
        """Initialize with FacultyProfile model."""
        super().__init__(db, FacultyProfile)
        self.logger = logging.getLogger(__name__)

    def get_by_user_id(self, user_id: str) -> Optional[FacultyProfile]:
        """Get the profile owned by an account."""
        try:
            return (
                self._apply_eager_loading(self.db.query(FacultyProfile))
                .filter(FacultyProfile.user_id == user_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting faculty profile for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve faculty profile: {str(e)}") from e

    def list_with_users(self) -> List[FacultyProfile]:
        """All profiles with their owning account, ordered by faculty name."""
        try:
            return (
                self._apply_eager_loading(self.db.query(FacultyProfile))
                .join(User, FacultyProfile.user_id == User.id)
                .order_by(User.name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing faculty profiles: {str(e)}")
            raise RepositoryException(f"Failed to list faculty profiles: {str(e)}") from e

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(FacultyProfile.user))
