# backend/consultation_portal/routes/v1/profile.py
"""
Profile routes - API v1

Endpoints:
    PUT /faculty    → Faculty member edits their directory entry
    PUT /student    → Student edits name, department or batch (new token issued)
"""

import asyncio
import logging

from fastapi import APIRouter, Body, Depends

from ...api.dependencies.auth import get_current_principal
from ...api.dependencies.services import get_profile_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...principal import AccountPrincipal
from ...schemas.faculty import FacultyProfileResponse
from ...schemas.profile import (
    FacultyProfileUpdate,
    FacultyProfileUpdateResponse,
    StudentProfileUpdate,
    StudentProfileUpdateResponse,
)
from ...services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profile-v1"])


@router.put("/faculty", response_model=FacultyProfileUpdateResponse)
async def update_faculty_profile(
    payload: FacultyProfileUpdate = Body(...),
    principal: AccountPrincipal = Depends(get_current_principal),
    profile_service: ProfileService = Depends(get_profile_service),
) -> FacultyProfileUpdateResponse:
    try:
        profile = await asyncio.to_thread(
            profile_service.update_faculty_profile, principal, payload
        )
        return FacultyProfileUpdateResponse(
            message="Profile updated successfully.",
            faculty=FacultyProfileResponse.from_profile(profile),
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/student", response_model=StudentProfileUpdateResponse)
async def update_student_profile(
    payload: StudentProfileUpdate = Body(...),
    principal: AccountPrincipal = Depends(get_current_principal),
    profile_service: ProfileService = Depends(get_profile_service),
) -> StudentProfileUpdateResponse:
    try:
        issued = await asyncio.to_thread(
            profile_service.update_student_profile, principal, payload
        )
        user = issued.user
        return StudentProfileUpdateResponse(
            message="Profile updated successfully.",
            name=user.name,
            role=user.role,
            token=issued.token,
            student_department=user.student_department,
            batch_no=user.batch_no,
        )
    except DomainException as e:
        handle_domain_exception(e)
