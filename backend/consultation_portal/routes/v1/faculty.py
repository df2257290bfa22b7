# backend/consultation_portal/routes/v1/faculty.py
"""
Faculty directory routes - API v1 (public)

Endpoints:
    GET /               → All faculty members
    GET /{faculty_id}   → One faculty member including available slots
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from ...api.dependencies.services import get_faculty_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.faculty import FacultyDirectoryEntry, FacultyProfileResponse
from ...services.faculty_service import FacultyService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["faculty-v1"])


@router.get("", response_model=List[FacultyDirectoryEntry])
async def list_faculty(
    faculty_service: FacultyService = Depends(get_faculty_service),
) -> List[FacultyDirectoryEntry]:
    try:
        profiles = await asyncio.to_thread(faculty_service.list_faculty)
        return [FacultyDirectoryEntry.from_profile(profile) for profile in profiles]
    except DomainException as e:
        handle_domain_exception(e)


@router.get(
    "/{faculty_id}",
    response_model=FacultyProfileResponse,
    responses={404: {"description": "Faculty member not found"}},
)
async def get_faculty(
    faculty_id: str = Path(..., description="Faculty profile id"),
    faculty_service: FacultyService = Depends(get_faculty_service),
) -> FacultyProfileResponse:
    try:
        profile = await asyncio.to_thread(faculty_service.get_faculty, faculty_id)
        return FacultyProfileResponse.from_profile(profile)
    except DomainException as e:
        handle_domain_exception(e)
