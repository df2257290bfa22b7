# backend/consultation_portal/schemas/auth.py
"""
Registration and login schemas.

Registration is a tagged union on ``role``: each variant carries only the
fields valid for that role. A body without ``role`` registers a student.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Discriminator, EmailStr, Field, Tag, ValidationInfo, field_validator

from ..core.constants import (
    MAX_BIO_LENGTH,
    MAX_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    REGISTRATION_DEFAULT_BIO,
    REGISTRATION_DEFAULT_DEPARTMENT,
    REGISTRATION_DEFAULT_TITLE,
)
from ..core.enums import RoleName
from ._strict_base import StrictModel, StrictRequestModel


def normalize_email(value: str) -> str:
    return value.strip().lower()


def join_slots(value: Any) -> Any:
    """Accept available slots as free text or a list of slot strings."""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    return value


class _RegistrationBase(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email", mode="after")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class StudentRegistration(_RegistrationBase):
    role: Literal["student"] = "student"
    student_department: str = Field(..., min_length=1, max_length=100)
    batch_no: str = Field(..., min_length=1, max_length=50)


class FacultyRegistration(_RegistrationBase):
    role: Literal["faculty"]
    department: str = Field(default=REGISTRATION_DEFAULT_DEPARTMENT, max_length=100)
    title: str = Field(default=REGISTRATION_DEFAULT_TITLE, max_length=100)
    bio: str = Field(default=REGISTRATION_DEFAULT_BIO, max_length=MAX_BIO_LENGTH)
    available_slots: Optional[str] = None

    @field_validator("available_slots", mode="before")
    @classmethod
    def _join_slots(cls, value: Any) -> Any:
        return join_slots(value)

    @field_validator("department", "title", "bio", mode="after")
    @classmethod
    def _blank_means_default(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if value:
            return value
        defaults = {
            "department": REGISTRATION_DEFAULT_DEPARTMENT,
            "title": REGISTRATION_DEFAULT_TITLE,
            "bio": REGISTRATION_DEFAULT_BIO,
        }
        return defaults[info.field_name]


def _registration_role(value: Any) -> str:
    if isinstance(value, dict):
        role = value.get("role")
    else:
        role = getattr(value, "role", None)
    return role or RoleName.STUDENT.value


RegistrationRequest = Annotated[
    Union[
        Annotated[StudentRegistration, Tag(RoleName.STUDENT.value)],
        Annotated[FacultyRegistration, Tag(RoleName.FACULTY.value)],
    ],
    Discriminator(_registration_role),
]


class LoginRequest(StrictRequestModel):
    # Plain str: a malformed address must fail the same way as a wrong password
    email: str = Field(..., max_length=254)
    password: str

    @field_validator("email", mode="after")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class AuthResponse(StrictModel):
    """Public account summary plus a fresh credential."""

    id: str
    name: str
    email: str
    role: Literal["student", "faculty"]
    faculty_id: Optional[str] = None
    token: str


class RegisterResponse(AuthResponse):
    message: str = "Registration successful."


__all__: List[str] = [
    "AuthResponse",
    "FacultyRegistration",
    "LoginRequest",
    "RegisterResponse",
    "RegistrationRequest",
    "StudentRegistration",
]
