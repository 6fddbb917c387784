# =============================================================================
# core/models/user.py - Account Schemas
# =============================================================================
# These models define the API contract for account operations:
# - SignupRequest / LoginRequest: inbound bodies
# - UserProfile: the per-user profile row stored in the `users` table
# - SignupResponse / LoginResponse: outbound bodies
#
# Passwords only ever live on the request models; nothing that is stored or
# returned has a password field.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .common import CamelModel, RequestModel, RequiredStr, TrimmedStr


class UserRole(str, Enum):
    """Role of a user. Only admin tooling outside this API promotes to admin."""
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Account status stored on the profile."""
    ACTIVE = "active"
    DISABLED = "disabled"


# =============================================================================
# Requests
# =============================================================================

class SignupRequest(RequestModel):
    """
    Body of POST /signup.

    Example:
        {
            "fullName": "Jane Doe",
            "email": "jane@x.com",
            "password": "secret123",
            "phone": "+27123456789"
        }
    """

    full_name: TrimmedStr = Field(..., description="Display name for the account")
    email: TrimmedStr = Field(..., description="Login email; unique per account")
    password: RequiredStr = Field(..., description="Plain password, forwarded to the identity provider only")
    phone: str | None = Field(
        default=None,
        description="Optional phone; only E.164 values (+ and 7-15 digits) reach the identity provider"
    )

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_phone_field(cls, value: Any) -> str | None:
        # Non-string phones are ignored rather than rejected
        if not isinstance(value, str):
            return None
        return value.strip() or None


class LoginRequest(RequestModel):
    """Body of POST /login."""

    email: TrimmedStr
    password: RequiredStr


# =============================================================================
# Stored profile
# =============================================================================

class UserProfile(CamelModel):
    """
    Profile row in the `users` table, keyed by the identity provider's uid.

    `created_at` is assigned by the database on insert, so it is None on a
    profile that has not been written yet.
    """

    uid: str
    full_name: str
    email: str
    phone: str | None = None
    created_at: datetime | None = None
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE

    def to_row(self) -> dict[str, Any]:
        """Database row for insert; lets the database fill created_at."""
        return self.model_dump(mode="json", exclude={"created_at"})


# =============================================================================
# Responses
# =============================================================================

class SignupUser(CamelModel):
    """Safe subset of the created account."""
    uid: str
    email: str | None = None
    display_name: str | None = None
    phone_number: str | None = None


class SignupResponse(CamelModel):
    message: str = "Signup successful."
    user: SignupUser


class AuthSession(CamelModel):
    """
    Tokens returned by a successful password sign-in.

    Clients send `idToken` back as `Authorization: Bearer <idToken>`.
    """
    uid: str
    email: str | None = None
    id_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Token lifetime in seconds")


class LoginResponse(CamelModel):
    message: str = "Login successful."
    auth: AuthSession
    profile: UserProfile | None = None
