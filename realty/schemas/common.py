"""
Shared schema building blocks.
Field types here carry the coercion rules for loosely typed client input.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from realty.utils.validators import (
    MAX_INT,
    blank_to_none,
    coerce_count,
    coerce_datetime,
    coerce_decimal_text,
    coerce_optional_count,
    decode_saved_properties,
    lowercase,
    reject_blank,
    stored_decimal_text,
)


class CamelModel(BaseModel):
    """
    Base schema accepting camelCase or snake_case keys.
    Serializes with camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# Required, non-blank text
RequiredText = Annotated[str, BeforeValidator(reject_blank)]

# Number or decimal string, kept as decimal text
DecimalText = Annotated[str, BeforeValidator(coerce_decimal_text)]

# Decimal read from a NUMERIC column, as its shortest exact text
StoredDecimal = Annotated[str, BeforeValidator(stored_decimal_text)]

# Number or numeric string, parsed to an integer
CountInt = Annotated[int, BeforeValidator(coerce_count), Field(le=MAX_INT)]

# Optional integer where "" means absent
OptionalCount = Annotated[Optional[int], BeforeValidator(coerce_optional_count), Field(le=MAX_INT)]

# Serial ID referencing another row
ReferenceId = Annotated[int, BeforeValidator(coerce_count), Field(gt=0, le=MAX_INT)]

# Datetime or ISO-8601 string
FlexibleDateTime = Annotated[datetime, BeforeValidator(coerce_datetime)]

# Saved property IDs as a list or a delimited string
SavedPropertyIds = Annotated[List[int], BeforeValidator(decode_saved_properties)]

# Optional free text where "" means absent
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]

# Case-insensitive tag input for enum fields
Tag = BeforeValidator(lowercase)
