"""
Core enums for the consultation portal.

Roles are a closed set: every account is either a student or a faculty
member, and the role decides which profile fields the account carries.
"""

from enum import Enum


class RoleName(str, Enum):
    """Account roles."""

    STUDENT = "student"
    FACULTY = "faculty"
