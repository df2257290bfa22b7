from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Iterable, Optional, cast

from fastapi.security import OAuth2PasswordBearer
import jwt
from passlib.context import CryptContext

from .core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Pre-computed bcrypt hash for timing attack prevention.
# Used when user doesn't exist to prevent timing-based user enumeration.
DUMMY_HASH_FOR_TIMING_ATTACK = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.V4ferVKnNaOuJi"

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login", auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except (ValueError, TypeError) as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    hashed = pwd_context.hash(password)
    return str(hashed)


def is_allowed_email_domain(email: str, allowed_domains: Optional[Iterable[str]] = None) -> bool:
    """
    Check an email against the allow-listed domains.

    Matching is case-insensitive and exact on the part after the last '@':
    ``a@SRU.EDU.IN`` matches ``sru.edu.in`` while ``a@cs.sru.edu.in`` does not.
    """
    domains = (
        [d.lower().lstrip("@") for d in allowed_domains]
        if allowed_domains is not None
        else settings.allowed_email_domains
    )
    normalized = (email or "").strip().lower()
    if "@" not in normalized:
        return False
    host = normalized.rsplit("@", 1)[1]
    return host in domains


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: The claims to encode; ``sub`` carries the account id and ``role`` the role
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})

    encoded_jwt = cast(
        str,
        jwt.encode(
            to_encode,
            _secret_value(settings.secret_key),
            algorithm=settings.algorithm,
        ),
    )

    logger.info(f"Created access token for user: {data.get('sub')}")
    return encoded_jwt


def issue_credential(user_id: str, role: str) -> str:
    """Credential handed out at registration, login and student profile update."""
    return create_access_token({"sub": user_id, "role": role})


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify a JWT access token; raises jwt.PyJWTError on any failure."""
    payload_raw = jwt.decode(
        token,
        _secret_value(settings.secret_key),
        algorithms=[settings.algorithm],
        options={"require": ["exp", "sub"]},
    )
    return cast(Dict[str, Any], payload_raw)
