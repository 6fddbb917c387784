# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: camelCase base models and shared field types
# - user.py: Signup/login bodies, stored user profile, auth responses
# - tracking.py: Click/applied bodies and responses
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import (
    CamelModel,
    MessageResponse,
    RequestModel,
    RequiredStr,
    TrimmedStr,
)

from .user import (
    AuthSession,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    SignupUser,
    UserProfile,
    UserRole,
    UserStatus,
)

from .tracking import (
    AppliedDetailsResponse,
    AppliedIdsResponse,
    BursaryClickRequest,
    BursaryIdsResponse,
    ItemKind,
    UniversityIdRequest,
    UniversityIdsResponse,
    UniversityLookup,
)

__all__ = [
    # Common
    "CamelModel",
    "MessageResponse",
    "RequestModel",
    "RequiredStr",
    "TrimmedStr",
    # Accounts
    "AuthSession",
    "LoginRequest",
    "LoginResponse",
    "SignupRequest",
    "SignupResponse",
    "SignupUser",
    "UserProfile",
    "UserRole",
    "UserStatus",
    # Tracking
    "AppliedDetailsResponse",
    "AppliedIdsResponse",
    "BursaryClickRequest",
    "BursaryIdsResponse",
    "ItemKind",
    "UniversityIdRequest",
    "UniversityIdsResponse",
    "UniversityLookup",
]
