"""Principal abstractions for authenticated portal callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Protocol, Union, runtime_checkable

from .core.enums import RoleName
from .models.user import User


@runtime_checkable
class Principal(Protocol):
    """Represents the authenticated account making a request."""

    @property
    def id(self) -> str:
        """Account id used for ownership checks and audit logs."""
        ...

    @property
    def role(self) -> Literal["student", "faculty"]:
        ...


@dataclass(frozen=True)
class StudentPrincipal:
    """Principal backed by a student account."""

    user_id: str
    email: str
    name: str

    @property
    def id(self) -> str:
        return self.user_id

    @property
    def role(self) -> Literal["student", "faculty"]:
        return "student"


@dataclass(frozen=True)
class FacultyPrincipal:
    """Principal backed by a faculty account; profile id may be absent mid-registration."""

    user_id: str
    email: str
    name: str
    faculty_profile_id: Optional[str]

    @property
    def id(self) -> str:
        return self.user_id

    @property
    def role(self) -> Literal["student", "faculty"]:
        return "faculty"


AccountPrincipal = Union[StudentPrincipal, FacultyPrincipal]


def principal_for(user: User) -> AccountPrincipal:
    """Build the principal for a freshly loaded account."""
    if user.role == RoleName.FACULTY.value:
        return FacultyPrincipal(
            user_id=user.id,
            email=user.email,
            name=user.name,
            faculty_profile_id=user.faculty_profile_id,
        )
    return StudentPrincipal(user_id=user.id, email=user.email, name=user.name)
