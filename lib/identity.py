# =============================================================================
# lib/identity.py - Identity Provider Gateway
# =============================================================================
# Wraps the three things this API asks of Supabase Auth:
# - create / delete a user (admin API, service_role key)
# - verify a password and hand back tokens (GoTrue password grant, anon key)
# - verify a bearer token (JWT, HS256 secret or project JWKS)
#
# Provider failures are normalized into IdentityProviderError with an
# IdentityErrorCode, so callers map codes to HTTP responses without knowing
# GoTrue's wire format.
#
# Usage:
#   gateway = SupabaseIdentityGateway()
#   created = await gateway.create_user("a@b.co", "secret123", "Ann")
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWKError
from supabase import Client

from app.config import settings
from lib.supabase_client import SupabaseClient
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

TOKEN_AUDIENCE = "authenticated"


class IdentityErrorCode(str, Enum):
    """Provider failures this API knows how to answer."""
    EMAIL_EXISTS = "EMAIL_EXISTS"
    PHONE_EXISTS = "PHONE_EXISTS"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PHONE = "INVALID_PHONE"
    EMAIL_NOT_FOUND = "EMAIL_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_DISABLED = "USER_DISABLED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    UNKNOWN = "UNKNOWN"


# GoTrue error_code -> normalized code
_GOTRUE_CODES: dict[str, IdentityErrorCode] = {
    "email_exists": IdentityErrorCode.EMAIL_EXISTS,
    "user_already_exists": IdentityErrorCode.EMAIL_EXISTS,
    "phone_exists": IdentityErrorCode.PHONE_EXISTS,
    "weak_password": IdentityErrorCode.INVALID_PASSWORD,
    "email_address_invalid": IdentityErrorCode.INVALID_EMAIL,
    "user_not_found": IdentityErrorCode.EMAIL_NOT_FOUND,
    "invalid_credentials": IdentityErrorCode.INVALID_CREDENTIALS,
    "invalid_grant": IdentityErrorCode.INVALID_CREDENTIALS,
    "user_banned": IdentityErrorCode.USER_DISABLED,
}


class IdentityProviderError(ApplicationError):
    """A call to the identity provider failed."""

    def __init__(
        self,
        message: str,
        code: IdentityErrorCode = IdentityErrorCode.UNKNOWN,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code.value, details=details)
        self.error_code = code


@dataclass(frozen=True)
class CreatedIdentity:
    uid: str
    email: str | None
    display_name: str | None
    phone_number: str | None


@dataclass(frozen=True)
class PasswordSession:
    uid: str
    email: str | None
    id_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True)
class VerifiedToken:
    uid: str
    email: str | None = None


class IdentityGateway(ABC):
    """Operations this API needs from the identity provider."""

    @abstractmethod
    async def create_user(
        self,
        email: str,
        password: str,
        display_name: str,
        phone: str | None = None,
    ) -> CreatedIdentity:
        ...

    @abstractmethod
    async def delete_user(self, uid: str) -> None:
        ...

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> PasswordSession:
        ...

    @abstractmethod
    async def verify_token(self, token: str) -> VerifiedToken:
        ...


# =============================================================================
# Error translation
# =============================================================================

def classify_provider_error(code: str | None, message: str | None) -> IdentityErrorCode:
    """
    Map a GoTrue error code (or, on older servers, its message) to a
    normalized code.
    """
    if code and code.lower() in _GOTRUE_CODES:
        return _GOTRUE_CODES[code.lower()]

    text = (message or "").lower()
    if code and code.lower() == "validation_failed":
        return IdentityErrorCode.INVALID_PHONE if "phone" in text else IdentityErrorCode.INVALID_EMAIL
    if "already been registered" in text or "already registered" in text:
        return IdentityErrorCode.PHONE_EXISTS if "phone" in text else IdentityErrorCode.EMAIL_EXISTS
    if "password should" in text or "weak password" in text:
        return IdentityErrorCode.INVALID_PASSWORD
    if "invalid login credentials" in text:
        return IdentityErrorCode.INVALID_CREDENTIALS
    if "invalid format" in text or "invalid phone" in text:
        return IdentityErrorCode.INVALID_PHONE if "phone" in text else IdentityErrorCode.INVALID_EMAIL
    return IdentityErrorCode.UNKNOWN


def translate_auth_exception(exc: Exception, action: str) -> IdentityProviderError:
    """Convert an exception raised by supabase-py's auth client."""
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)
    normalized = classify_provider_error(code if isinstance(code, str) else None, message)
    return IdentityProviderError(
        message=f"Failed to {action}: {message}",
        code=normalized,
        details={"provider_code": code, "status": getattr(exc, "status", None)},
    )


# =============================================================================
# Supabase implementation
# =============================================================================

def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.jwks_url, timeout=settings.AUTH_HTTP_TIMEOUT)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.jwks_url}")
        return _jwks_cache
    except Exception as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys beat no keys
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Pick the key and algorithm to verify a token with.

    Raises:
        JWTError: If the header is unreadable or no matching key exists
    """
    unverified_header = jwt.get_unverified_header(token)
    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            raise JWTError("HS256 token but SUPABASE_JWT_SECRET is not configured")
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                # Verify with the algorithm the key was published for
                key_alg = key.get("alg")
                if not key_alg or key_alg == "HS256":
                    raise JWTError(f"Signing key {kid} has no usable alg")
                return key, key_alg

    raise JWTError(f"No signing key found for alg={alg}, kid={kid}")


def decode_access_token(token: str) -> VerifiedToken:
    """
    Verify a Supabase access token and extract the caller.

    Raises:
        IdentityProviderError: TOKEN_EXPIRED or TOKEN_INVALID
    """
    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        raise IdentityProviderError("Token has expired", IdentityErrorCode.TOKEN_EXPIRED) from e
    except (JWTError, JWKError) as e:
        raise IdentityProviderError(f"Invalid token: {e}", IdentityErrorCode.TOKEN_INVALID) from e

    user_id = payload.get("sub")
    if not user_id:
        raise IdentityProviderError("Invalid token: missing user ID", IdentityErrorCode.TOKEN_INVALID)

    return VerifiedToken(uid=str(user_id), email=payload.get("email"))


class SupabaseIdentityGateway(IdentityGateway):
    """
    IdentityGateway backed by Supabase Auth.

    supabase-py's client is synchronous, so admin calls run in a worker
    thread. Password sign-in goes straight to the GoTrue REST endpoint over
    the shared async HTTP client; signing in through the SDK would store the
    session on the process-wide client.
    """

    def __init__(
        self,
        client: Client | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self._client = client
        self._http = http

    @property
    def client(self) -> Client:
        return self._client or SupabaseClient.get_client()

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http or SupabaseClient.get_http_client()

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: str,
        phone: str | None = None,
    ) -> CreatedIdentity:
        attributes: dict[str, Any] = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {"full_name": display_name},
        }
        if phone:
            attributes["phone"] = phone

        try:
            response = await asyncio.to_thread(self.client.auth.admin.create_user, attributes)
        except Exception as e:
            raise translate_auth_exception(e, "create user") from e

        user = response.user
        metadata = user.user_metadata or {}
        logger.info(f"Created identity {user.id}")
        return CreatedIdentity(
            uid=str(user.id),
            email=user.email,
            display_name=metadata.get("full_name"),
            phone_number=user.phone or None,
        )

    async def delete_user(self, uid: str) -> None:
        try:
            await asyncio.to_thread(self.client.auth.admin.delete_user, uid)
        except Exception as e:
            raise translate_auth_exception(e, "delete user") from e
        logger.info(f"Deleted identity {uid}")

    async def sign_in_with_password(self, email: str, password: str) -> PasswordSession:
        try:
            response = await self.http.post(
                "/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"Failed to reach auth server: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            # Newer GoTrue: {"error_code", "msg"}; older: {"error", "error_description"}
            code = body.get("error_code") or body.get("error")
            message = body.get("msg") or body.get("error_description") or body.get("message")
            raise IdentityProviderError(
                message=f"Password sign-in failed: {message or response.status_code}",
                code=classify_provider_error(code, message),
                details={"status": response.status_code, "provider_code": code},
            )

        user = body.get("user") or {}
        try:
            return PasswordSession(
                uid=str(user["id"]),
                email=user.get("email"),
                id_token=body["access_token"],
                refresh_token=body["refresh_token"],
                expires_in=int(body.get("expires_in", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise IdentityProviderError(f"Malformed sign-in response: missing {e}") from e

    async def verify_token(self, token: str) -> VerifiedToken:
        return await asyncio.to_thread(decode_access_token, token)
