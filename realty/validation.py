"""
Entry points of the insert-validation layer.

validate_insert() and validate_filter() are pure and synchronous: one raw
payload in, one canonical value out, or a PayloadValidationError listing every
field that failed.
"""

from typing import Any, Dict, Mapping, Type, Union
import enum
import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError

from realty.schemas.agent import AgentCreate
from realty.schemas.appointment import AppointmentCreate
from realty.schemas.filters import PropertyFilter
from realty.schemas.property import PropertyCreate
from realty.schemas.user import UserCreate
from realty.utils.exceptions import FieldError, FieldErrorKind, PayloadValidationError
from realty.utils.validators import field_errors_from_pydantic

logger = logging.getLogger(__name__)


class EntityKind(str, enum.Enum):
    """Record kinds that can be created from client payloads."""
    USER = "user"
    PROPERTY = "property"
    APPOINTMENT = "appointment"
    AGENT = "agent"


INSERT_SCHEMAS: Dict[EntityKind, Type[BaseModel]] = {
    EntityKind.USER: UserCreate,
    EntityKind.PROPERTY: PropertyCreate,
    EntityKind.APPOINTMENT: AppointmentCreate,
    EntityKind.AGENT: AgentCreate,
}

# Assigned by the database, never taken from a client
SERVER_ASSIGNED_FIELDS = ("id", "created_at", "createdAt")


def _as_mapping(raw_payload: Any) -> Dict[str, Any]:
    if isinstance(raw_payload, BaseModel):
        return raw_payload.model_dump(by_alias=True)
    if not isinstance(raw_payload, Mapping):
        raise PayloadValidationError([
            FieldError(
                field="body",
                kind=FieldErrorKind.SHAPE_MISMATCH,
                message="Payload must be an object",
            )
        ])
    return dict(raw_payload)


def validate_insert(entity_kind: Union[EntityKind, str], raw_payload: Any) -> BaseModel:
    """
    Validate a create payload and return its canonical form.

    Args:
        entity_kind: Which record kind the payload describes
        raw_payload: Client-supplied mapping (camelCase or snake_case keys)

    Returns:
        The entity's insert schema instance, without id or created_at

    Raises:
        PayloadValidationError: With every failing field, missing or malformed
    """
    try:
        kind = EntityKind(entity_kind)
    except ValueError:
        raise ValueError(f"Unknown entity kind: {entity_kind!r}")

    payload = _as_mapping(raw_payload)
    for field in SERVER_ASSIGNED_FIELDS:
        payload.pop(field, None)

    schema = INSERT_SCHEMAS[kind]
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors = field_errors_from_pydantic(exc)
        logger.debug(f"Rejected {kind.value} payload: {[error.field for error in errors]}")
        raise PayloadValidationError(errors, detail=f"Invalid {kind.value} payload")


def validate_filter(raw_query: Any) -> PropertyFilter:
    """
    Validate the shape of a property search request.

    Args:
        raw_query: Mapping of query parameters, all values strings

    Returns:
        PropertyFilter with absent and empty values set to None

    Raises:
        PayloadValidationError: On unknown keys or non-string values
    """
    query = _as_mapping(raw_query if raw_query is not None else {})
    try:
        return PropertyFilter.model_validate(query)
    except PydanticValidationError as exc:
        raise PayloadValidationError(
            field_errors_from_pydantic(exc), detail="Invalid property filter"
        )
