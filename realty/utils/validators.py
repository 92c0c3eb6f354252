"""
Coercion helpers that turn loosely typed client input into canonical values.
Used as Pydantic "before" validators by the request schemas.

Every helper raises PydanticCustomError so that Pydantic collects the failure
with the field location instead of stopping at the first bad field.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from realty.utils.exceptions import FieldError, FieldErrorKind

# Custom error type for present-but-blank required values
BLANK_ERROR = "blank"

# Pydantic error types reported as a missing field; every other type is a shape mismatch
MISSING_ERROR_TYPES = {"missing", BLANK_ERROR}

# Largest value an INTEGER column holds
MAX_INT = 2_147_483_647


def _shape_error(message: str, **context: Any) -> PydanticCustomError:
    return PydanticCustomError("shape_mismatch", message, context or None)


def _blank_error() -> PydanticCustomError:
    return PydanticCustomError(BLANK_ERROR, "Field required")


def reject_blank(value: Any) -> Any:
    """Treat an empty or whitespace-only string as a missing value."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise _blank_error()
    return value


def blank_to_none(value: Any) -> Any:
    """Map an empty or whitespace-only string to None."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def default_if_none(default: Any) -> Callable[[Any], Any]:
    """Build a validator that substitutes a default for an explicit null."""
    def _apply(value: Any) -> Any:
        return default if value is None else value
    return _apply


def lowercase(value: Any) -> Any:
    """Lowercase string input so enum tags match case-insensitively."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def number_to_text(value: Any) -> str:
    """
    Render a number as plain decimal text.
    Integral floats drop their fractional part (250000.0 -> "250000").
    """
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def coerce_decimal_text(value: Any) -> str:
    """
    Accept a number or a decimal string and return decimal text.
    Strings are kept as given so their precision survives persistence.
    """
    if isinstance(value, bool):
        raise _shape_error("Expected a number or a decimal string")

    if isinstance(value, (int, float, Decimal)):
        try:
            finite = Decimal(str(value)).is_finite()
        except InvalidOperation:
            finite = False
        if not finite:
            raise _shape_error("Number must be finite")
        return number_to_text(value)

    if isinstance(value, str):
        text = reject_blank(value)
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            raise _shape_error("'{input}' is not a decimal number", input=text)
        if not parsed.is_finite():
            raise _shape_error("'{input}' is not a finite decimal number", input=text)
        return text

    raise _shape_error("Expected a number or a decimal string")


def stored_decimal_text(value: Any) -> str:
    """
    Render a stored decimal as its shortest exact text.
    Trailing fractional zeros are dropped, so PostgreSQL scale and SQLite's
    REAL read-back padding ("34.1478000000") give the same output.
    """
    if isinstance(value, Decimal):
        text = format(value, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return coerce_decimal_text(value)


def coerce_count(value: Any) -> int:
    """Accept an integer or a numeric string and return an integer."""
    if isinstance(value, bool):
        raise _shape_error("Expected a whole number")

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise _shape_error("Expected a whole number, got {input}", input=value)

    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise _shape_error("Expected a whole number, got {input}", input=str(value))

    if isinstance(value, str):
        text = reject_blank(value)
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            raise _shape_error("'{input}' is not a number", input=text)
        if parsed.is_finite() and parsed == parsed.to_integral_value():
            return int(parsed)
        raise _shape_error("Expected a whole number, got '{input}'", input=text)

    raise _shape_error("Expected a number or a numeric string")


def coerce_optional_count(value: Any) -> Optional[int]:
    """Like coerce_count, but None and blank strings mean "absent"."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return coerce_count(value)


def coerce_datetime(value: Any) -> datetime:
    """
    Accept a datetime or an ISO-8601 string and return a timezone-aware datetime.
    Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = reject_blank(value)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise _shape_error("'{input}' is not a valid date", input=value)
    else:
        raise _shape_error("Expected a datetime or a date string")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_saved_properties(value: Any) -> List[int]:
    """
    Decode saved property IDs from a list or a delimited string.
    Accepts "1,2,3", "{1,2,3}" (PostgreSQL array text), "[1, 2]" and "".
    Duplicates are dropped, first occurrence wins.
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if text[:1] in ("{", "[") and text[-1:] in ("}", "]"):
            text = text[1:-1]
        items: List[Any] = [part.strip() for part in text.split(",") if part.strip()]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise _shape_error("Expected a list of property IDs or a comma separated string")

    decoded: List[int] = []
    for item in items:
        try:
            property_id = coerce_count(item)
        except PydanticCustomError:
            raise _shape_error("'{input}' is not a property ID", input=str(item))
        if not 0 < property_id <= MAX_INT:
            raise _shape_error("Property ID out of range: {input}", input=property_id)
        if property_id not in decoded:
            decoded.append(property_id)
    return decoded


def field_errors_from_pydantic(exc: PydanticValidationError) -> List[FieldError]:
    """
    Convert a Pydantic validation error into field errors.

    Args:
        exc: Pydantic validation error

    Returns:
        One FieldError per reported problem, in Pydantic's order
    """
    field_errors = []

    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"]) or "body"
        kind = (
            FieldErrorKind.MISSING
            if error["type"] in MISSING_ERROR_TYPES
            else FieldErrorKind.SHAPE_MISMATCH
        )
        field_errors.append(FieldError(field=field_path, kind=kind, message=error["msg"]))

    return field_errors

