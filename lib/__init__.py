# =============================================================================
# lib/ - Collaborator Adapters and Utilities
# =============================================================================
# This package contains the code that talks to the outside world:
# - supabase_client.py: Process-wide Supabase client + auth HTTP client
# - identity.py: Identity gateway (create/delete user, sign-in, token checks)
# - profile_store.py: Profile and click/applied tracking store
# - utils.py: Shared utilities (input checks, phone normalization, base error)
#
# Import adapters from their modules directly; identity and profile_store
# depend on core.models, which itself imports lib.utils.
# =============================================================================

from lib.utils import (
    ApplicationError,
    is_non_blank,
    normalize_phone,
)

__all__ = [
    "ApplicationError",
    "is_non_blank",
    "normalize_phone",
]
