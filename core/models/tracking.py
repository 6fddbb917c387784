# =============================================================================
# core/models/tracking.py - Click/Applied Tracking Schemas
# =============================================================================
# A user "clicks" bursaries and universities they are interested in. A clicked
# university can be promoted to "applied"; promotion removes the click.
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import Field

from .common import CamelModel, RequestModel, TrimmedStr


class ItemKind(str, Enum):
    """Kinds of items a user can click."""
    BURSARY = "bursary"
    UNIVERSITY = "university"


# =============================================================================
# Requests
# =============================================================================

class BursaryClickRequest(RequestModel):
    """Body of POST /bursaries/click."""

    bursary_id: TrimmedStr = Field(..., examples=["bursary_42"])


class UniversityIdRequest(RequestModel):
    """Body of POST /universities/click and POST /universities/applied."""

    university_id: TrimmedStr = Field(..., examples=["uni_1"])


# =============================================================================
# Responses
# =============================================================================

class BursaryIdsResponse(CamelModel):
    bursary_ids: list[str] = Field(default_factory=list)


class UniversityIdsResponse(CamelModel):
    university_ids: list[str] = Field(default_factory=list)


class AppliedIdsResponse(CamelModel):
    applied_ids: list[str] = Field(default_factory=list)


class AppliedDetailsResponse(CamelModel):
    """
    University documents for the caller's applied universities.

    `missing_ids` lists applied ids with no university document. It is
    left unset (and omitted from the response) when the user has applied
    nowhere.
    """
    universities: list[dict[str, Any]] = Field(default_factory=list)
    missing_ids: list[str] | None = None


# =============================================================================
# Internal
# =============================================================================

@dataclass(frozen=True)
class UniversityLookup:
    """Outcome of fetching one university: found (document) or missing (None)."""
    university_id: str
    document: dict[str, Any] | None

    @property
    def found(self) -> bool:
        return self.document is not None

    def to_public(self) -> dict[str, Any]:
        return {"id": self.university_id, **(self.document or {})}
