# =============================================================================
# lib/profile_store.py - Profile and Tracking Store
# =============================================================================
# Typed access to the per-user rows this API owns:
# - users                  profile row per identity
# - clicked_bursaries      (user_id, bursary_id)     -> clicked_at
# - clicked_universities   (user_id, university_id)  -> clicked_at
# - applied_universities   (user_id, university_id)  -> applied_at
# - universities           read-only reference documents
#
# Clicked -> applied promotion goes through the `promote_clicked_university`
# Postgres function (supabase/migrations/0001_applytrack.sql) so the delete
# and the upsert commit in one transaction.
#
# Usage:
#   store = SupabaseProfileStore()
#   await store.record_click(uid, ItemKind.UNIVERSITY, "uni_1")
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable

from supabase import Client

from core.models.tracking import ItemKind
from core.models.user import UserProfile
from lib.supabase_client import SupabaseClient
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
UNIVERSITIES_TABLE = "universities"
APPLIED_TABLE = "applied_universities"
PROMOTE_FUNCTION = "promote_clicked_university"

# kind -> (table, id column)
CLICK_TABLES: dict[ItemKind, tuple[str, str]] = {
    ItemKind.BURSARY: ("clicked_bursaries", "bursary_id"),
    ItemKind.UNIVERSITY: ("clicked_universities", "university_id"),
}


class StoreError(ApplicationError):
    """A read or write against the database failed."""

    def __init__(self, message: str, code: str = "STORE_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class ProfileStore(ABC):
    """Operations this API needs from the database."""

    @abstractmethod
    async def create_profile(self, profile: UserProfile) -> None:
        ...

    @abstractmethod
    async def get_profile(self, uid: str) -> UserProfile | None:
        ...

    @abstractmethod
    async def record_click(self, uid: str, kind: ItemKind, item_id: str) -> None:
        """Upsert the click row, refreshing clicked_at if it already exists."""

    @abstractmethod
    async def list_clicked(self, uid: str, kind: ItemKind) -> list[str]:
        ...

    @abstractmethod
    async def promote_university(self, uid: str, university_id: str) -> None:
        """Atomically drop the clicked row and upsert the applied row."""

    @abstractmethod
    async def list_applied(self, uid: str) -> list[str]:
        ...

    @abstractmethod
    async def get_university(self, university_id: str) -> dict[str, Any] | None:
        """Return the university document, or None if it doesn't exist."""


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseProfileStore(ProfileStore):
    """
    ProfileStore backed by Supabase tables.

    Each operation runs the synchronous supabase-py query in a worker thread
    and wraps any failure in StoreError.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client or SupabaseClient.get_client()

    async def _run(self, operation: str, query: Callable[[], Any], **details: Any) -> Any:
        try:
            response = await asyncio.to_thread(query)
        except Exception as e:
            raise StoreError(
                message=f"Failed to {operation}: {e}",
                code=f"{operation.upper().replace(' ', '_')}_FAILED",
                details=details,
            ) from e
        return response.data

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def create_profile(self, profile: UserProfile) -> None:
        await self._run(
            "create profile",
            lambda: self.client.table(USERS_TABLE)
            .upsert(profile.to_row(), on_conflict="uid")
            .execute(),
            uid=profile.uid,
        )
        logger.info(f"Created profile for {profile.uid}")

    async def get_profile(self, uid: str) -> UserProfile | None:
        rows = await self._run(
            "fetch profile",
            lambda: self.client.table(USERS_TABLE)
            .select("*")
            .eq("uid", uid)
            .limit(1)
            .execute(),
            uid=uid,
        )
        if not rows:
            return None
        return UserProfile.model_validate(rows[0])

    # -------------------------------------------------------------------------
    # Clicks
    # -------------------------------------------------------------------------

    async def record_click(self, uid: str, kind: ItemKind, item_id: str) -> None:
        table, id_column = CLICK_TABLES[kind]
        row = {"user_id": uid, id_column: item_id, "clicked_at": _utcnow()}
        await self._run(
            "record click",
            lambda: self.client.table(table)
            .upsert(row, on_conflict=f"user_id,{id_column}")
            .execute(),
            table=table,
            item_id=item_id,
        )

    async def list_clicked(self, uid: str, kind: ItemKind) -> list[str]:
        table, id_column = CLICK_TABLES[kind]
        rows = await self._run(
            "list clicks",
            lambda: self.client.table(table)
            .select(id_column)
            .eq("user_id", uid)
            .execute(),
            table=table,
        )
        return [row[id_column] for row in rows or []]

    # -------------------------------------------------------------------------
    # Applied
    # -------------------------------------------------------------------------

    async def promote_university(self, uid: str, university_id: str) -> None:
        params = {"p_user_id": uid, "p_university_id": university_id}
        await self._run(
            "promote university",
            lambda: self.client.rpc(PROMOTE_FUNCTION, params).execute(),
            university_id=university_id,
        )
        logger.debug(f"Promoted university {university_id} for {uid}")

    async def list_applied(self, uid: str) -> list[str]:
        rows = await self._run(
            "list applied",
            lambda: self.client.table(APPLIED_TABLE)
            .select("university_id")
            .eq("user_id", uid)
            .execute(),
        )
        return [row["university_id"] for row in rows or []]

    async def get_university(self, university_id: str) -> dict[str, Any] | None:
        rows = await self._run(
            "fetch university",
            lambda: self.client.table(UNIVERSITIES_TABLE)
            .select("*")
            .eq("id", university_id)
            .limit(1)
            .execute(),
            university_id=university_id,
        )
        if not rows:
            return None
        document = dict(rows[0])
        document.pop("id", None)
        return document
