# =============================================================================
# app/routers/universities.py - University Click/Applied Endpoints
# =============================================================================
# Handles the university side of tracking:
# - clicks (record/list)
# - applied (promote a click / list / list with university documents)
# All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter, status

from app.auth import CurrentUser
from app.dependencies import TrackingServiceDep
from core.models import (
    AppliedDetailsResponse,
    AppliedIdsResponse,
    ItemKind,
    MessageResponse,
    UniversityIdRequest,
    UniversityIdsResponse,
)

router = APIRouter(prefix="/universities")


# =============================================================================
# Clicks
# =============================================================================

@router.post(
    "/click",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_university_click(
    user: CurrentUser,
    body: UniversityIdRequest,
    tracking: TrackingServiceDep,
) -> MessageResponse:
    """Record that the caller clicked a university."""
    await tracking.record_click(user.id, ItemKind.UNIVERSITY, body.university_id)
    return MessageResponse(message="University recorded.")


@router.get("/click", response_model=UniversityIdsResponse)
async def list_university_clicks(
    user: CurrentUser,
    tracking: TrackingServiceDep,
) -> UniversityIdsResponse:
    """List clicked universities. Universities already applied to are not included."""
    university_ids = await tracking.list_clicked(user.id, ItemKind.UNIVERSITY)
    return UniversityIdsResponse(university_ids=university_ids)


# =============================================================================
# Applied
# =============================================================================

@router.post(
    "/applied",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_applied_university(
    user: CurrentUser,
    body: UniversityIdRequest,
    tracking: TrackingServiceDep,
) -> MessageResponse:
    """
    Mark a university as applied.

    Removes the click and records the application in one atomic write.
    A university that was never clicked is still recorded as applied.
    """
    await tracking.promote_university(user.id, body.university_id)
    return MessageResponse(message="Applied university recorded and clicked entry removed.")


@router.get("/applied", response_model=AppliedIdsResponse)
async def list_applied_universities(
    user: CurrentUser,
    tracking: TrackingServiceDep,
) -> AppliedIdsResponse:
    applied_ids = await tracking.list_applied(user.id)
    return AppliedIdsResponse(applied_ids=applied_ids)


@router.get(
    "/applied/details",
    response_model=AppliedDetailsResponse,
    response_model_exclude_unset=True,
)
async def list_applied_university_details(
    user: CurrentUser,
    tracking: TrackingServiceDep,
) -> AppliedDetailsResponse:
    """
    Full university documents for every applied university.

    Ids whose university document no longer exists are returned in
    `missingIds` instead of failing the request.
    """
    return await tracking.applied_details(user.id)
