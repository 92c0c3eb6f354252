"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["squareFeet"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["'three' is not a number"]
    )

    type: Optional[str] = Field(
        None,
        description="Error kind: missing or shape_mismatch",
        examples=["shape_mismatch"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "timestamp": "2024-01-01T00:00:00Z",
        "request_id": "abc12345",
    }
    if details:
        error["details"] = details
    return {"error": error}


COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Business rule violated",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "BAD_REQUEST", "Appointment cannot move from 'cancelled' to 'confirmed'"
        )}},
    },
    403: {
        "description": "Forbidden - Not the owner of the resource",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "FORBIDDEN", "You don't own this property"
        )}},
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "NOT_FOUND", "Property not found with ID: 42"
        )}},
    },
    409: {
        "description": "Conflict - Unique field already taken",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "CONFLICT", "User with username 'jdoe' already exists"
        )}},
    },
    422: {
        "description": "Validation Error - Payload could not be coerced",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "VALIDATION_ERROR",
            "Payload validation failed",
            [
                {"field": "title", "type": "missing", "message": "Field required"},
                {"field": "bedrooms", "type": "shape_mismatch", "message": "'three' is not a number"},
            ],
        )}},
    },
    500: {
        "description": "Internal Server Error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."
        )}},
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response documentation for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error responses for OpenAPI documentation
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for create and update endpoints."""
    return get_error_responses(400, 404, 409, 422, 500)
