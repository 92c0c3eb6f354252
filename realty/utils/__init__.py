"""
Utility modules for the Realty Listings API.
"""

from .exceptions import (
    APIException,
    FieldError,
    FieldErrorKind,
    ValidationError,
    PayloadValidationError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    InvalidCredentialsError,
    DuplicateResourceError,
    InvalidStatusTransitionError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "FieldError",
    "FieldErrorKind",
    "ValidationError",
    "PayloadValidationError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "InvalidCredentialsError",
    "DuplicateResourceError",
    "InvalidStatusTransitionError",
]
