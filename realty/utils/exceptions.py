"""
Custom exception classes for the Realty Listings API.
Provides structured error handling with appropriate HTTP status codes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status
import enum


class FieldErrorKind(str, enum.Enum):
    """Why a single field failed validation."""
    MISSING = "missing"
    SHAPE_MISMATCH = "shape_mismatch"


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""

    field: str
    kind: FieldErrorKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "type": self.kind.value, "message": self.message}


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Validation error exception."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=422,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class PayloadValidationError(ValidationError):
    """
    Raised when a client payload cannot be coerced into its canonical shape.
    Carries every field error found, not just the first one.
    """

    def __init__(self, errors: List[FieldError], detail: str = "Payload validation failed"):
        super().__init__(detail=detail, field_errors=[error.to_dict() for error in errors])
        self.errors = list(errors)

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed, in reporting order."""
        return [error.field for error in self.errors]

    def errors_for(self, field: str) -> List[FieldError]:
        return [error for error in self.errors if error.field == field]


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class InvalidCredentialsError(APIException):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid username or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED"
        )


# Resource specific exceptions
class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self, property_id: int):
        super().__init__("Property", property_id)


class UserNotFoundError(NotFoundError):
    """User not found exception."""

    def __init__(self, user_id: int):
        super().__init__("User", user_id)


class PropertyOwnershipError(ForbiddenError):
    """Property ownership violation exception."""

    def __init__(self, detail: str = "You don't own this property"):
        super().__init__(detail)


class DuplicateResourceError(ConflictError):
    """Duplicate resource exception."""

    def __init__(self, resource: str, field: str, identifier: str):
        super().__init__(f"{resource} with {field} '{identifier}' already exists")
        self.field = field


class InvalidStatusTransitionError(BadRequestError):
    """Status change not allowed from the current state."""

    def __init__(self, resource: str, current: str, requested: str):
        super().__init__(f"{resource} cannot move from '{current}' to '{requested}'")


class PropertyUnavailableError(BadRequestError):
    """Property is not open for viewings."""

    def __init__(self, property_id: int, current_status: str):
        super().__init__(f"Property {property_id} is not available (status: {current_status})")


class ServiceUnavailableError(APIException):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="SERVICE_UNAVAILABLE"
        )
