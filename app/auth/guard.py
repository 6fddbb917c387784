# =============================================================================
# app/auth/guard.py - Bearer Credential Guard
# =============================================================================
# Turns an Authorization header into either the caller's identity or a typed
# rejection. Pure with respect to HTTP: the FastAPI dependency in
# dependencies.py decides what a rejection looks like on the wire.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Union

from lib.identity import IdentityErrorCode, IdentityGateway, IdentityProviderError

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

MALFORMED_HEADER_MESSAGE = "Missing/invalid Authorization header."
INVALID_TOKEN_MESSAGE = "Invalid or expired token."


@dataclass(frozen=True)
class Authorized:
    uid: str
    email: str | None = None


@dataclass(frozen=True)
class Rejected:
    reason: str  # "missing" | "malformed" | "expired" | "invalid"
    message: str


AuthResult = Union[Authorized, Rejected]


def parse_bearer(header: str | None) -> str | None:
    """
    Extract the token from `Bearer <token>`.

    Returns None unless the header is exactly two space-separated parts
    with the literal scheme `Bearer`.
    """
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        return None
    return parts[1]


async def authorize(header: str | None, identity: IdentityGateway) -> AuthResult:
    """
    Resolve an Authorization header to the caller.

    Args:
        header: Raw Authorization header value (None if absent)
        identity: Gateway used to verify the bearer token

    Returns:
        Authorized with the caller's uid, or Rejected with the reason.
    """
    if not header:
        return Rejected(reason="missing", message=MALFORMED_HEADER_MESSAGE)

    token = parse_bearer(header)
    if token is None:
        return Rejected(reason="malformed", message=MALFORMED_HEADER_MESSAGE)

    try:
        verified = await identity.verify_token(token)
    except IdentityProviderError as e:
        logger.warning(f"Token rejected: {e}")
        reason = "expired" if e.error_code == IdentityErrorCode.TOKEN_EXPIRED else "invalid"
        return Rejected(reason=reason, message=INVALID_TOKEN_MESSAGE)

    return Authorized(uid=verified.uid, email=verified.email)
