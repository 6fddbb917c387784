# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the collaborator adapters and services.
# Handlers receive these through Depends(); tests replace the two providers
# via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.services import AccountService, TrackingService
from lib.identity import IdentityGateway, SupabaseIdentityGateway
from lib.profile_store import ProfileStore, SupabaseProfileStore


def get_identity_gateway() -> IdentityGateway:
    """Identity gateway over the process-wide Supabase connections."""
    return SupabaseIdentityGateway()


def get_profile_store() -> ProfileStore:
    """Profile store over the process-wide Supabase client."""
    return SupabaseProfileStore()


IdentityDep = Annotated[IdentityGateway, Depends(get_identity_gateway)]
StoreDep = Annotated[ProfileStore, Depends(get_profile_store)]


def get_account_service(identity: IdentityDep, store: StoreDep) -> AccountService:
    return AccountService(identity=identity, store=store)


def get_tracking_service(store: StoreDep) -> TrackingService:
    return TrackingService(store=store)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
TrackingServiceDep = Annotated[TrackingService, Depends(get_tracking_service)]
