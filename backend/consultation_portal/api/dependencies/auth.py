# backend/consultation_portal/api/dependencies/auth.py
"""
Authentication dependencies (the access gate).

Every privileged route resolves the bearer credential to a principal.
The account is re-read from the store on each call, so a credential for
a deleted account is rejected and the role comes from the stored account.
"""

import asyncio
import logging
from typing import Optional

from fastapi import Depends
import jwt
from sqlalchemy.orm import Session

from ...auth import decode_access_token, oauth2_scheme_optional
from ...core.exceptions import (
    DependencyUnavailableException,
    RepositoryException,
    UnauthenticatedException,
)
from ...principal import AccountPrincipal, principal_for
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def resolve_principal(db: Session, token: Optional[str]) -> AccountPrincipal:
    """
    Turn a raw bearer token into a principal.

    Raises:
        UnauthenticatedException: token absent, malformed, expired, or for a deleted account
    """
    if not token:
        raise UnauthenticatedException()

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired credential")
        raise UnauthenticatedException("Credential expired")
    except jwt.PyJWTError as e:
        logger.warning(f"JWT validation error: {str(e)}")
        raise UnauthenticatedException("Could not validate credentials")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        logger.warning("Token payload missing 'sub' field")
        raise UnauthenticatedException("Could not validate credentials")

    try:
        user = RepositoryFactory.create_user_repository(db).get_by_id(
            user_id, load_relationships=False
        )
    except RepositoryException as exc:
        raise DependencyUnavailableException() from exc

    if user is None:
        logger.warning(f"Credential references missing account {user_id}")
        raise UnauthenticatedException("Not authorized, user not found")

    claimed_role = payload.get("role")
    if claimed_role is not None and claimed_role != user.role:
        logger.info(f"Role claim {claimed_role!r} for {user_id} is stale; using stored role")

    return principal_for(user)


async def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db),
) -> AccountPrincipal:
    """Dependency resolving the caller; raises UnauthenticatedException."""
    return await asyncio.to_thread(resolve_principal, db, token)

