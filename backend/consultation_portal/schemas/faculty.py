"""Faculty directory schemas."""

from typing import Optional

from ..models.faculty import FacultyProfile
from ._strict_base import StrictModel


class FacultyDirectoryEntry(StrictModel):
    id: str
    name: str
    email: str
    department: Optional[str] = None
    title: str
    bio: str

    @classmethod
    def from_profile(cls, profile: FacultyProfile) -> "FacultyDirectoryEntry":
        return cls(
            id=profile.id,
            name=profile.user.name,
            email=profile.user.email,
            department=profile.department,
            title=profile.title,
            bio=profile.bio,
        )


class FacultyProfileResponse(FacultyDirectoryEntry):
    available_slots: str

    @classmethod
    def from_profile(cls, profile: FacultyProfile) -> "FacultyProfileResponse":
        return cls(
            id=profile.id,
            name=profile.user.name,
            email=profile.user.email,
            department=profile.department,
            title=profile.title,
            bio=profile.bio,
            available_slots=profile.available_slots,
        )
