# =============================================================================
# core/models/common.py - Shared Schema Building Blocks
# =============================================================================
# The public API speaks camelCase JSON ("universityId", "missingIds") while
# Python code and the database use snake_case. CamelModel bridges the two:
# fields are declared in snake_case, validated/serialized by camelCase alias.
# =============================================================================

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lib.utils import is_non_blank


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class RequestModel(CamelModel):
    """
    Base for inbound request bodies.

    Unknown keys are ignored. Mandatory text fields are declared as
    RequiredStr or TrimmedStr.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def required_string(value: Any) -> str:
    """Reject anything that isn't a non-blank string."""
    if not is_non_blank(value):
        raise ValueError("must be a non-empty string")
    return value


# Non-blank string, kept as sent (passwords)
RequiredStr = Annotated[str, BeforeValidator(required_string)]

# Non-blank string, surrounding whitespace removed (ids, names, emails)
TrimmedStr = Annotated[str, BeforeValidator(required_string), AfterValidator(str.strip)]


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by write endpoints."""
    message: str = Field(..., examples=["University recorded."])
