"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    AUTH_REQUIRED = "AUTH_REQUIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    EMAIL_UNCONFIRMED = "EMAIL_UNCONFIRMED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    THOUGHT_NOT_FOUND = "THOUGHT_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_HANDLE = "INVALID_HANDLE"
    CANNOT_FOLLOW_SELF = "CANNOT_FOLLOW_SELF"

    # Conflict errors (409)
    HANDLE_TAKEN = "HANDLE_TAKEN"
    HANDLE_CONFLICT = "HANDLE_CONFLICT"
    UNIQUE_VIOLATION = "UNIQUE_VIOLATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


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
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthRequiredError(AuthenticationError):
    """No principal is available for a profile-dependent action."""

    def __init__(self, message: str = "Log in to continue") -> None:
        super().__init__(message=message, error_code=ErrorCode.AUTH_REQUIRED)


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class EmailUnconfirmedError(AppException):
    """The principal's email address has not been confirmed yet."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_UNCONFIRMED,
            message="Confirm your email address to continue",
            status_code=403,
            details={"email": email} if email else None,
        )


class StorageUnavailableError(AppException):
    """The backing store failed or could not be reached. Safe to retry."""

    def __init__(self, message: str = "Storage is unavailable, please try again") -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_UNAVAILABLE,
            message=message,
            status_code=500,
        )


class UniqueViolationError(AppException):
    """A store-level unique constraint rejected a write.

    ``constraint`` is one of ``"id"``, ``"handle"`` or ``"email"``.
    """

    def __init__(self, constraint: str) -> None:
        self.constraint = constraint
        super().__init__(
            error_code=ErrorCode.UNIQUE_VIOLATION,
            message=f"Unique constraint violated: {constraint}",
            status_code=409,
            details={"constraint": constraint},
        )


class HandleConflictError(AppException):
    """Profile creation kept losing handle races after the bounded retry."""

    def __init__(self, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.HANDLE_CONFLICT,
            message=f"Username '{handle}' became taken while signing up. Please try again.",
            status_code=409,
            details={"handle": handle},
        )


class HandleTakenError(AppException):
    """A user-chosen handle already belongs to another profile."""

    def __init__(self, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.HANDLE_TAKEN,
            message="Username already taken",
            status_code=409,
            details={"handle": handle},
        )


class InvalidHandleError(AppException):
    """A user-chosen handle does not match the handle rules."""

    def __init__(self, handle: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_HANDLE,
            message=(
                "Username must be 3-20 characters of lowercase letters, digits or underscores"
            ),
            status_code=400,
            details={"handle": handle},
        )


class MissingFieldsError(AppException):
    """Required request fields are missing or blank."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.MISSING_FIELDS,
            message=f"Missing required fields: {', '.join(fields)}.",
            status_code=400,
            details={"fields": fields},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {ref}",
            status_code=404,
            details={"profile": ref},
        )


class ThoughtNotFoundError(AppException):
    """Thought not found (or not owned by the caller)."""

    def __init__(self, thought_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.THOUGHT_NOT_FOUND,
            message=f"Thought not found: {thought_id}",
            status_code=404,
            details={"thought_id": thought_id},
        )


class NotificationNotFoundError(AppException):
    """Notification not found for this recipient."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOTIFICATION_NOT_FOUND,
            message=f"Notification not found: {notification_id}",
            status_code=404,
            details={"notification_id": notification_id},
        )


class CannotFollowSelfError(AppException):
    """A profile tried to follow itself."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.CANNOT_FOLLOW_SELF,
            message="You cannot follow yourself",
            status_code=400,
        )


class InvalidThoughtError(AppException):
    """Thought content is empty or too long."""

    def __init__(self, max_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=f"A thought must be between 1 and {max_length} characters",
            status_code=400,
            details={"max_length": max_length},
        )


class InvalidAvatarError(AppException):
    """Uploaded avatar is not an acceptable image."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
        )
