# =============================================================================
# core/services/account_service.py - Signup and Login
# =============================================================================
# Business rules for creating accounts and signing in. Separates HTTP
# concerns from identity-provider/database concerns:
# - signup creates the identity, then the profile row, and deletes the
#   identity again if the profile write fails
# - login verifies the password, then looks the profile up best-effort
#
# Provider errors are mapped to the API's exception taxonomy here.
# =============================================================================

import logging

from app.exceptions import (
    ApplyTrackException,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ProviderError,
)
from core.models.user import (
    AuthSession,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    SignupUser,
    UserProfile,
)
from lib.identity import (
    CreatedIdentity,
    IdentityErrorCode,
    IdentityGateway,
    IdentityProviderError,
)
from lib.profile_store import ProfileStore, StoreError
from lib.utils import normalize_phone

logger = logging.getLogger(__name__)


def _signup_error(error: IdentityProviderError) -> ApplyTrackException:
    code = error.error_code
    if code == IdentityErrorCode.EMAIL_EXISTS:
        return ConflictError("Email already in use.", code="EMAIL_EXISTS")
    if code == IdentityErrorCode.PHONE_EXISTS:
        return ConflictError("Phone number already in use.", code="PHONE_EXISTS")
    if code == IdentityErrorCode.INVALID_PASSWORD:
        return ProviderError("Invalid password (check length/complexity).", code="INVALID_PASSWORD", status_code=400)
    if code == IdentityErrorCode.INVALID_EMAIL:
        return ProviderError("Invalid email format.", code="INVALID_EMAIL", status_code=400)
    if code == IdentityErrorCode.INVALID_PHONE:
        return ProviderError(
            "Invalid phone number (use E.164, e.g., +27123456789).",
            code="INVALID_PHONE",
            status_code=400,
        )
    logger.error(f"Signup error: {error} details={error.details}")
    return ProviderError()


def _login_error(error: IdentityProviderError) -> ApplyTrackException:
    code = error.error_code
    if code == IdentityErrorCode.EMAIL_NOT_FOUND:
        return NotFoundError("Email not found.", code="EMAIL_NOT_FOUND")
    if code == IdentityErrorCode.INVALID_PASSWORD:
        return ProviderError("Invalid password.", code="INVALID_PASSWORD", status_code=400)
    if code == IdentityErrorCode.INVALID_CREDENTIALS:
        return AuthError("Invalid email or password.", code="INVALID_CREDENTIALS")
    if code == IdentityErrorCode.USER_DISABLED:
        return ForbiddenError("User account disabled.", code="USER_DISABLED")
    logger.error(f"Login error: {error} details={error.details}")
    return ProviderError()


class AccountService:
    """
    Signup and login over an identity gateway and a profile store.

    Both collaborators are injected so tests can substitute in-memory fakes.
    """

    def __init__(self, identity: IdentityGateway, store: ProfileStore):
        self.identity = identity
        self.store = store

    async def signup(self, request: SignupRequest) -> SignupResponse:
        """
        Create an identity and its profile.

        The phone only reaches the identity provider when it is E.164-like;
        the profile keeps whatever trimmed phone was sent.

        Raises:
            ConflictError: Email or phone already registered
            ProviderError: Rejected input (400) or any other failure (500)
        """
        try:
            created = await self.identity.create_user(
                email=request.email,
                password=request.password,
                display_name=request.full_name,
                phone=normalize_phone(request.phone),
            )
        except IdentityProviderError as e:
            raise _signup_error(e) from e

        profile = UserProfile(
            uid=created.uid,
            full_name=request.full_name,
            email=request.email,
            phone=request.phone,
        )

        try:
            await self._create_profile_or_rollback(created, profile)
        except StoreError as e:
            logger.error(f"Signup error: {e} details={e.details}")
            raise ProviderError() from e

        logger.info(f"Signup complete for {created.uid}")
        return SignupResponse(
            user=SignupUser(
                uid=created.uid,
                email=created.email,
                display_name=created.display_name,
                phone_number=created.phone_number or None,
            )
        )

    async def _create_profile_or_rollback(
        self,
        created: CreatedIdentity,
        profile: UserProfile,
    ) -> None:
        """
        Write the profile; on failure delete the identity and re-raise.

        A failed rollback is logged but never replaces the original error.
        """
        try:
            await self.store.create_profile(profile)
        except StoreError:
            logger.warning(f"Profile write failed, rolling back identity {created.uid}")
            try:
                await self.identity.delete_user(created.uid)
            except IdentityProviderError as rollback_error:
                logger.error(
                    f"Rollback failed, identity {created.uid} has no profile: {rollback_error}"
                )
            raise

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Verify the password and return tokens plus the stored profile.

        A missing or unreadable profile yields `profile=None`, not an error.

        Raises:
            NotFoundError, AuthError, ForbiddenError, ProviderError
        """
        try:
            session = await self.identity.sign_in_with_password(request.email, request.password)
        except IdentityProviderError as e:
            raise _login_error(e) from e

        try:
            profile = await self.store.get_profile(session.uid)
        except StoreError as e:
            logger.warning(f"Could not fetch profile for {session.uid}: {e}")
            profile = None

        return LoginResponse(
            auth=AuthSession(
                uid=session.uid,
                email=session.email,
                id_token=session.id_token,
                refresh_token=session.refresh_token,
                expires_in=session.expires_in,
            ),
            profile=profile,
        )
