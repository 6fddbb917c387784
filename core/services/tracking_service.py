# =============================================================================
# core/services/tracking_service.py - Click/Applied Tracking
# =============================================================================
# Per-user tracking of clicked bursaries/universities and applied
# universities. Every operation is scoped to the authenticated caller's uid.
# =============================================================================

import asyncio
import logging

from app.exceptions import ProviderError
from core.models.tracking import AppliedDetailsResponse, ItemKind, UniversityLookup
from lib.profile_store import ProfileStore, StoreError

logger = logging.getLogger(__name__)

# Caller-facing failure messages per kind
_RECORD_FAILED = {
    ItemKind.BURSARY: "Failed to record bursary.",
    ItemKind.UNIVERSITY: "Failed to record university.",
}
_LIST_FAILED = {
    ItemKind.BURSARY: "Failed to fetch bursaries.",
    ItemKind.UNIVERSITY: "Failed to fetch universities.",
}


class TrackingService:
    """Click, list and promote operations over a ProfileStore."""

    def __init__(self, store: ProfileStore):
        self.store = store

    async def record_click(self, uid: str, kind: ItemKind, item_id: str) -> None:
        try:
            await self.store.record_click(uid, kind, item_id)
        except StoreError as e:
            logger.error(f"{kind.value} click save error: {e}")
            raise ProviderError(_RECORD_FAILED[kind], code="RECORD_CLICK_FAILED") from e

    async def list_clicked(self, uid: str, kind: ItemKind) -> list[str]:
        try:
            return await self.store.list_clicked(uid, kind)
        except StoreError as e:
            logger.error(f"{kind.value} click list error: {e}")
            raise ProviderError(_LIST_FAILED[kind], code="LIST_CLICKS_FAILED") from e

    async def promote_university(self, uid: str, university_id: str) -> None:
        """
        Move a university from clicked to applied in one atomic write.

        Works whether or not the university was clicked first.
        """
        try:
            await self.store.promote_university(uid, university_id)
        except StoreError as e:
            logger.error(f"applied university save error: {e}")
            raise ProviderError("Failed to record applied university.", code="PROMOTE_FAILED") from e

    async def list_applied(self, uid: str) -> list[str]:
        try:
            return await self.store.list_applied(uid)
        except StoreError as e:
            logger.error(f"applied university list error: {e}")
            raise ProviderError("Failed to fetch applied universities.", code="LIST_APPLIED_FAILED") from e

    async def applied_details(self, uid: str) -> AppliedDetailsResponse:
        """
        Fetch the university documents for everything the caller applied to.

        Documents are fetched concurrently. A university with no document
        lands in `missing_ids`; any other fetch failure fails the request.
        """
        try:
            applied_ids = await self.store.list_applied(uid)
            if not applied_ids:
                return AppliedDetailsResponse(universities=[])

            lookups = await asyncio.gather(
                *(self._lookup(university_id) for university_id in applied_ids)
            )
        except StoreError as e:
            logger.error(f"applied university details error: {e}")
            raise ProviderError(
                "Failed to fetch applied universities details.",
                code="APPLIED_DETAILS_FAILED",
            ) from e

        return AppliedDetailsResponse(
            universities=[lookup.to_public() for lookup in lookups if lookup.found],
            missing_ids=[lookup.university_id for lookup in lookups if not lookup.found],
        )

    async def _lookup(self, university_id: str) -> UniversityLookup:
        document = await self.store.get_university(university_id)
        return UniversityLookup(university_id=university_id, document=document)
