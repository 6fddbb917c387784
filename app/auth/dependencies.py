# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header

from app.auth.guard import Rejected, authorize
from app.auth.models import AuthUser
from app.dependencies import IdentityDep
from app.exceptions import AuthError

logger = logging.getLogger(__name__)

_REJECTION_CODES = {
    "missing": "MISSING_TOKEN",
    "malformed": "MALFORMED_TOKEN",
    "expired": "TOKEN_EXPIRED",
    "invalid": "INVALID_TOKEN",
}


async def get_current_user(
    identity: IdentityDep,
    authorization: Annotated[Optional[str], Header()] = None,
) -> AuthUser:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    Raises:
        AuthError: 401 if the header is absent, malformed, or the token is
            invalid or expired
    """
    result = await authorize(authorization, identity)

    if isinstance(result, Rejected):
        raise AuthError(
            result.message,
            code=_REJECTION_CODES[result.reason],
            bearer_challenge=True,
        )

    logger.debug(f"Authenticated user: {result.uid}")
    return AuthUser(id=result.uid, email=result.email)


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
