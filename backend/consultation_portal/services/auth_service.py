# backend/consultation_portal/services/auth_service.py
"""
Authentication Service for the consultation portal

Handles account registration and login. Keeps business logic out of routes.

Faculty registration spans two records (account and faculty profile) that
are committed one after the other. If the profile half fails, the account
created first is deleted again so no faculty account is left without a
profile, and the same registration can simply be retried.
"""

from dataclasses import dataclass
import logging
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from ..auth import (
    DUMMY_HASH_FOR_TIMING_ATTACK,
    get_password_hash,
    is_allowed_email_domain,
    issue_credential,
    verify_password,
)
from ..core.constants import DEFAULT_AVAILABLE_SLOTS
from ..core.enums import RoleName
from ..core.exceptions import (
    DependencyUnavailableException,
    DomainRejectedException,
    DuplicateEmailException,
    InvalidCredentialsException,
    ProfileCreationFailedException,
    RepositoryException,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..repositories.faculty_profile_repository import FacultyProfileRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import FacultyRegistration, StudentRegistration
from .base import BaseService

logger = logging.getLogger(__name__)

Registration = Union[StudentRegistration, FacultyRegistration]


@dataclass(frozen=True)
class IssuedCredential:
    """An account together with a freshly signed credential for it."""

    user: User
    token: str


class AuthService(BaseService):
    """Service for handling registration and authentication."""

    def __init__(
        self,
        db: Session,
        user_repository: Optional[UserRepository] = None,
        faculty_profile_repository: Optional[FacultyProfileRepository] = None,
        allowed_domains: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize authentication service."""
        super().__init__(db)
        self.logger = logging.getLogger(__name__)

        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)
        self.faculty_profile_repository = (
            faculty_profile_repository or RepositoryFactory.create_faculty_profile_repository(db)
        )
        self.allowed_domains = list(allowed_domains) if allowed_domains is not None else None

    @BaseService.measure_operation("register")
    def register(self, registration: Registration) -> IssuedCredential:
        """
        Register a student or faculty account.

        Args:
            registration: Validated registration request (student or faculty variant)

        Returns:
            IssuedCredential for the new account

        Raises:
            DomainRejectedException: Email domain is not allow-listed
            DuplicateEmailException: Email already has an account
            ProfileCreationFailedException: Faculty profile could not be created
                (the account has been removed again)
        """
        email = registration.email.strip().lower()

        if not is_allowed_email_domain(email, self.allowed_domains):
            self.logger.warning(f"Registration rejected - domain not allowed: {email}")
            raise DomainRejectedException()

        if self._email_taken(email):
            self.logger.warning(f"Registration rejected - email already registered: {email}")
            raise DuplicateEmailException()

        if isinstance(registration, FacultyRegistration):
            user = self._register_faculty(email, registration)
        else:
            user = self._create_account(
                email,
                registration,
                role=RoleName.STUDENT,
                student_department=registration.student_department,
                batch_no=registration.batch_no,
            )

        self.log_operation("register", user_id=user.id, role=user.role)
        return IssuedCredential(user=user, token=issue_credential(user.id, user.role))

    def _email_taken(self, email: str) -> bool:
        try:
            return self.user_repository.email_exists(email)
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc

    def _create_account(
        self, email: str, registration: Registration, role: RoleName, **fields: Optional[str]
    ) -> User:
        try:
            with self.transaction():
                return self.user_repository.create(
                    email=email,
                    hashed_password=get_password_hash(registration.password),
                    name=registration.name,
                    role=role.value,
                    **fields,
                )
        except DependencyUnavailableException:
            # Lost a race with a concurrent registration for the same email
            if self._email_taken(email):
                raise DuplicateEmailException()
            raise

    def _register_faculty(self, email: str, registration: FacultyRegistration) -> User:
        """Account first, then profile, then the link; undo the account on failure."""
        user = self._create_account(email, registration, role=RoleName.FACULTY)
        user_id = user.id

        try:
            with self.transaction():
                profile = self.faculty_profile_repository.create(
                    user_id=user_id,
                    department=registration.department,
                    title=registration.title,
                    bio=registration.bio,
                    available_slots=registration.available_slots or DEFAULT_AVAILABLE_SLOTS,
                )
            with self.transaction():
                linked = self.user_repository.link_faculty_profile(user_id, profile.id)
                if linked is None:
                    raise RepositoryException(f"Account {user_id} disappeared before linking")
        except Exception as exc:
            self.logger.error(f"Faculty profile creation failed for {email}: {exc}")
            self._compensate_faculty_registration(user_id)
            raise ProfileCreationFailedException() from exc

        self.logger.info(f"Registered faculty {user_id} with profile {profile.id}")
        return linked

    def _compensate_faculty_registration(self, user_id: str) -> None:
        """Delete the half-registered faculty account and any profile already created."""
        try:
            with self.transaction():
                user = self.user_repository.get_by_id(user_id, load_relationships=False)
                if user is not None and user.faculty_profile_id is not None:
                    user.faculty_profile_id = None
                    self.user_repository.flush()
                profile = self.faculty_profile_repository.get_by_user_id(user_id)
                if profile is not None:
                    self.faculty_profile_repository.delete(profile.id)
                self.user_repository.delete(user_id)
        except DependencyUnavailableException:
            self.logger.critical(
                f"Could not remove orphaned faculty account {user_id} after failed registration",
                exc_info=True,
            )
            return
        self.logger.info(f"Removed faculty account {user_id} after failed profile creation")

    @BaseService.measure_operation("authenticate")
    def authenticate(self, email: str, password: str) -> IssuedCredential:
        """
        Authenticate by email and password.

        Unknown email, rejected domain and wrong password all raise the same
        InvalidCredentialsException; only the log records which check failed.
        """
        email = (email or "").strip().lower()
        self.logger.info(f"Authentication attempt for user: {email}")

        if not is_allowed_email_domain(email, self.allowed_domains):
            self.logger.warning(f"Authentication failed - domain not allowed: {email}")
            verify_password(password, DUMMY_HASH_FOR_TIMING_ATTACK)
            raise InvalidCredentialsException()

        try:
            user = self.user_repository.get_by_email(email)
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc

        if user is None:
            self.logger.warning(f"Authentication failed - user not found: {email}")
            # Prevent timing attacks - still do a fake verification
            verify_password(password, DUMMY_HASH_FOR_TIMING_ATTACK)
            raise InvalidCredentialsException()

        if not verify_password(password, user.hashed_password):
            self.logger.warning(f"Authentication failed - incorrect password: {email}")
            raise InvalidCredentialsException()

        self.logger.info(f"Successful authentication for user: {email}")
        return IssuedCredential(user=user, token=issue_credential(user.id, user.role))
