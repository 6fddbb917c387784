# =============================================================================
# app/routers/bursaries.py - Bursary Click Endpoints
# =============================================================================
# Records and lists the bursaries the caller has clicked.
# All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter, status

from app.auth import CurrentUser
from app.dependencies import TrackingServiceDep
from core.models import BursaryClickRequest, BursaryIdsResponse, ItemKind, MessageResponse

router = APIRouter(prefix="/bursaries")


@router.post(
    "/click",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_bursary_click(
    user: CurrentUser,
    body: BursaryClickRequest,
    tracking: TrackingServiceDep,
) -> MessageResponse:
    """Record that the caller clicked a bursary (idempotent, refreshes the timestamp)."""
    await tracking.record_click(user.id, ItemKind.BURSARY, body.bursary_id)
    return MessageResponse(message="Bursary recorded.")


@router.get("/click", response_model=BursaryIdsResponse)
async def list_bursary_clicks(
    user: CurrentUser,
    tracking: TrackingServiceDep,
) -> BursaryIdsResponse:
    """List the ids of every bursary the caller has clicked."""
    bursary_ids = await tracking.list_clicked(user.id, ItemKind.BURSARY)
    return BursaryIdsResponse(bursary_ids=bursary_ids)
