"""
Profile update schemas.

Updates are partial: a field left out (or sent blank, for students) keeps
its stored value.
"""

from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.constants import MAX_BIO_LENGTH, MAX_NAME_LENGTH
from .auth import join_slots
from .faculty import FacultyProfileResponse
from ._strict_base import StrictModel, StrictRequestModel


class FacultyProfileUpdate(StrictRequestModel):
    department: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=MAX_BIO_LENGTH)
    available_slots: Optional[str] = None

    @field_validator("available_slots", mode="before")
    @classmethod
    def _join_slots(cls, value: Any) -> Any:
        return join_slots(value)


class StudentProfileUpdate(StrictRequestModel):
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    student_department: Optional[str] = Field(default=None, max_length=100)
    batch_no: Optional[str] = Field(default=None, max_length=50)

    @field_validator("name", "student_department", "batch_no", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class FacultyProfileUpdateResponse(StrictModel):
    message: str
    faculty: FacultyProfileResponse


class StudentProfileUpdateResponse(StrictModel):
    message: str
    name: str
    role: str
    token: str
    student_department: Optional[str] = None
    batch_no: Optional[str] = None
