# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Public endpoints (no bearer token required):
# - POST /signup: create identity + profile
# - POST /login: password sign-in, returns tokens and profile
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.dependencies import AccountServiceDep
from core.models.user import LoginRequest, LoginResponse, SignupRequest, SignupResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(body: SignupRequest, accounts: AccountServiceDep) -> SignupResponse:
    """
    Create an account.

    Creates the identity (email/password, display name, phone if E.164) and
    a profile with role "user" and status "active". The password is never
    stored in the profile or echoed back.

    Raises:
        400: Missing fields, invalid email/password/phone
        409: Email (or phone) already in use
    """
    return await accounts.signup(body)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, accounts: AccountServiceDep) -> LoginResponse:
    """
    Sign in with email and password.

    Returns `auth.idToken`, which clients send as `Authorization: Bearer
    <idToken>` on every other endpoint, plus the stored profile (or null).

    Raises:
        400: Missing fields or wrong password
        401: Invalid email or password
        403: Account disabled
        404: Email not found
    """
    return await accounts.login(body)
