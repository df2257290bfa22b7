# backend/consultation_portal/core/exceptions.py
"""
Domain-specific exceptions for the consultation portal.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .constants import INVALID_CREDENTIALS_MESSAGE


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: Optional[str] = None
    headers: Optional[Dict[str, str]] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the standard error envelope."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict(),
            headers=self.headers,
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ServiceUnavailableException(DomainException):
    """Raised when a backing dependency cannot serve the request."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


# Specific business exceptions


class DomainRejectedException(ValidationException):
    """Raised when a registration email is outside the allow-listed domains."""

    default_code = "DOMAIN_REJECTED"

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "Invalid email domain. Please use a college or official email address."
        )


class DuplicateEmailException(ValidationException):
    """Raised when registering an email that already has an account."""

    default_code = "DUPLICATE_EMAIL"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "User already exists")


class InvalidCredentialsException(UnauthorizedException):
    """
    Raised for every login failure.

    Unknown email, rejected domain and wrong password all produce this
    exception with the same message so callers cannot enumerate accounts.
    """

    default_code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class UnauthenticatedException(UnauthorizedException):
    """Raised when a credential is absent, malformed, expired or orphaned."""

    default_code = "UNAUTHENTICATED"
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Not authenticated")


class NotAuthorizedException(ForbiddenException):
    """Raised when an authenticated caller may not act on a resource."""

    default_code = "NOT_AUTHORIZED"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Not authorized to perform this action.")


class InvalidTransitionException(ValidationException):
    """Raised when a booking cannot move from its current status to the target."""

    default_code = "INVALID_TRANSITION"

    def __init__(
        self,
        message: str,
        *,
        current_status: Optional[str] = None,
        target_status: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if current_status is not None:
            details["current_status"] = current_status
        if target_status is not None:
            details["target_status"] = target_status
        super().__init__(message, details=details)


class ValidationFailedException(ValidationException):
    """Raised when a field required for the requested operation is missing or invalid."""

    default_code = "VALIDATION_FAILED"


class ProfileCreationFailedException(ServiceException):
    """Raised when the faculty profile half of a registration could not be created."""

    default_code = "PROFILE_CREATION_FAILED"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Server error during registration")


class DependencyUnavailableException(ServiceUnavailableException):
    """Raised when the store or another infrastructure dependency fails."""

    default_code = "DEPENDENCY_UNAVAILABLE"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Service temporarily unavailable. Please retry.")


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
