# backend/consultation_portal/routes/v1/auth.py
"""
Authentication routes - API v1

Endpoints:
    POST /register    → Student or faculty registration
    POST /login       → Email/password login
"""

import asyncio
import logging
from typing import Union

from fastapi import APIRouter, Body, Depends, status

from ...api.dependencies.services import get_auth_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.auth import (
    AuthResponse,
    FacultyRegistration,
    LoginRequest,
    RegisterResponse,
    RegistrationRequest,
    StudentRegistration,
)
from ...services.auth_service import AuthService, IssuedCredential

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["auth-v1"])


def _account_summary(issued: IssuedCredential) -> dict[str, object]:
    user = issued.user
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "faculty_id": user.faculty_profile_id,
        "token": issued.token,
    }


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email domain rejected or already registered"}},
)
async def register(
    payload: RegistrationRequest = Body(...),
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register an account; faculty registrations also create the faculty profile."""
    registration: Union[StudentRegistration, FacultyRegistration] = payload
    try:
        issued = await asyncio.to_thread(auth_service.register, registration)
        return RegisterResponse(message="Registration successful.", **_account_summary(issued))
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    payload: LoginRequest = Body(...),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for a credential."""
    try:
        issued = await asyncio.to_thread(auth_service.authenticate, payload.email, payload.password)
        return AuthResponse(**_account_summary(issued))
    except DomainException as e:
        handle_domain_exception(e)
