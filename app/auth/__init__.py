# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication against Supabase Auth, plus the public
# signup/login routes.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import CurrentUser, get_current_user
from app.auth.guard import AuthResult, Authorized, Rejected, authorize
from app.auth.models import AuthUser

__all__ = [
    "CurrentUser",
    "get_current_user",
    "AuthResult",
    "Authorized",
    "Rejected",
    "authorize",
    "AuthUser",
]
