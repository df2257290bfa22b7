# backend/consultation_portal/services/faculty_service.py
"""
Faculty directory service.

Read-only access to faculty profiles for students browsing the portal.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import DependencyUnavailableException, NotFoundException, RepositoryException
from ..models.faculty import FacultyProfile
from ..repositories.factory import RepositoryFactory
from ..repositories.faculty_profile_repository import FacultyProfileRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class FacultyService(BaseService):
    """Service for the public faculty directory."""

    def __init__(self, db: Session, repository: Optional[FacultyProfileRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_faculty_profile_repository(db)

    @BaseService.measure_operation("list_faculty")
    def list_faculty(self) -> List[FacultyProfile]:
        """All faculty profiles with their owning accounts."""
        try:
            return self.repository.list_with_users()
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc

    @BaseService.measure_operation("get_faculty")
    def get_faculty(self, faculty_id: str) -> FacultyProfile:
        """
        One faculty profile by its id.

        Raises:
            NotFoundException: No profile with that id
        """
        try:
            profile = self.repository.get_by_id(faculty_id)
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc
        if profile is None or profile.user is None:
            raise NotFoundException("Faculty member not found")
        return profile
