"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_SESSION = "INVALID_SESSION"

    # Not found errors (404)
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    ASSIGNMENT_NOT_FOUND = "ASSIGNMENT_NOT_FOUND"
    NO_ACTIVE_ASSIGNMENT = "NO_ACTIVE_ASSIGNMENT"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_CLIENT = "DUPLICATE_CLIENT"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    DUPLICATE_ACTIVE_ASSIGNMENT = "DUPLICATE_ACTIVE_ASSIGNMENT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Unauthorized access. Please log in.",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ValidationError(AppException):
    """Request data is missing, malformed or collides with a unique field."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class DuplicateClientError(ValidationError):
    """Another client already uses this WhatsApp number."""

    def __init__(self, whatsapp: str) -> None:
        super().__init__(
            message="A client with this WhatsApp number already exists.",
            error_code=ErrorCode.DUPLICATE_CLIENT,
            details={"whatsapp": whatsapp},
        )


class DuplicateServiceAccountError(ValidationError):
    """Another service account already uses this name or email."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            message=f"A service account with this {field} already exists.",
            error_code=ErrorCode.DUPLICATE_ACCOUNT,
            details={field: value},
        )


class DuplicateActiveAssignmentError(ValidationError):
    """The client already holds an assignment that has not expired."""

    def __init__(self, client_id: str) -> None:
        super().__init__(
            message="This client already has an active assignment.",
            error_code=ErrorCode.DUPLICATE_ACTIVE_ASSIGNMENT,
            details={"client_id": client_id},
        )


class NotFoundError(AppException):
    """Base class for missing resources."""

    def __init__(
        self, error_code: ErrorCode, message: str, details: Any | None = None
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ClientNotFoundError(NotFoundError):
    """Client not found."""

    def __init__(self, client_ref: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.CLIENT_NOT_FOUND,
            message="Client not found.",
            details={"client": client_ref} if client_ref else None,
        )


class ServiceAccountNotFoundError(NotFoundError):
    """Service account not found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ACCOUNT_NOT_FOUND,
            message="Service account not found.",
            details={"account_id": account_id},
        )


class ProfileNotFoundError(NotFoundError):
    """Profile name does not exist on the service account."""

    def __init__(self, account_id: str, profile_name: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_name}",
            details={"account_id": account_id, "profile_name": profile_name},
        )


class AssignmentNotFoundError(NotFoundError):
    """Assignment not found."""

    def __init__(self, assignment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ASSIGNMENT_NOT_FOUND,
            message="Assignment not found.",
            details={"assignment_id": assignment_id},
        )


class NoActiveAssignmentError(NotFoundError):
    """Client exists but holds no active assignment."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.NO_ACTIVE_ASSIGNMENT,
            message="You have no active assignment at the moment.",
        )
