# backend/consultation_portal/services/profile_service.py
"""
Profile Service for the consultation portal

Partial updates of the caller's own profile. Faculty edit their public
directory entry; students edit their name, department and batch and get
a fresh credential back.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..auth import issue_credential
from ..core.exceptions import NotAuthorizedException, NotFoundException
from ..models.faculty import FacultyProfile
from ..models.user import User
from ..principal import AccountPrincipal, FacultyPrincipal, StudentPrincipal
from ..repositories.factory import RepositoryFactory
from ..repositories.faculty_profile_repository import FacultyProfileRepository
from ..repositories.user_repository import UserRepository
from ..schemas.profile import FacultyProfileUpdate, StudentProfileUpdate
from .auth_service import IssuedCredential
from .base import BaseService

logger = logging.getLogger(__name__)


class ProfileService(BaseService):
    """Service for profile updates."""

    def __init__(
        self,
        db: Session,
        user_repository: Optional[UserRepository] = None,
        faculty_profile_repository: Optional[FacultyProfileRepository] = None,
    ):
        super().__init__(db)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)
        self.faculty_profile_repository = (
            faculty_profile_repository or RepositoryFactory.create_faculty_profile_repository(db)
        )

    @BaseService.measure_operation("update_faculty_profile")
    def update_faculty_profile(
        self, principal: AccountPrincipal, update: FacultyProfileUpdate
    ) -> FacultyProfile:
        """
        Apply the supplied fields to the caller's faculty profile.

        Raises:
            NotAuthorizedException: Caller is not faculty
            NotFoundException: No profile linked to the caller
        """
        if not isinstance(principal, FacultyPrincipal):
            raise NotAuthorizedException("Not authorized or user is not a faculty member.")

        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        with self.transaction():
            profile = self.faculty_profile_repository.get_by_user_id(principal.user_id)
            if profile is None:
                raise NotFoundException("Faculty profile not found.")
            for field, value in changes.items():
                setattr(profile, field, value)
            self.faculty_profile_repository.flush()

        self.log_operation(
            "update_faculty_profile", user_id=principal.user_id, fields=sorted(changes)
        )
        return profile

    @BaseService.measure_operation("update_student_profile")
    def update_student_profile(
        self, principal: AccountPrincipal, update: StudentProfileUpdate
    ) -> IssuedCredential:
        """
        Apply the supplied fields to the caller's student account and re-issue the credential.

        Raises:
            NotAuthorizedException: Caller is not a student
        """
        if not isinstance(principal, StudentPrincipal):
            raise NotAuthorizedException("Not authorized or user is not a student.")

        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        with self.transaction():
            user: Optional[User] = self.user_repository.get_by_id(
                principal.user_id, load_relationships=False
            )
            if user is None or not user.is_student:
                raise NotAuthorizedException("Not authorized or user is not a student.")
            for field, value in changes.items():
                setattr(user, field, value)
            self.user_repository.flush()

        self.log_operation(
            "update_student_profile", user_id=principal.user_id, fields=sorted(changes)
        )
        return IssuedCredential(user=user, token=issue_credential(user.id, user.role))
