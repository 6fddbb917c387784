# =============================================================================
# lib/supabase_client.py - Supabase Connection Holder
# =============================================================================
# Process-wide connections to the external collaborators:
# - a service_role Supabase client (admin auth + table access)
# - an httpx.AsyncClient for the Auth REST endpoints the SDK client would
#   otherwise make stateful (password sign-in stores a session on the client)
#
# Both are created once in the FastAPI lifespan (see app/main.py) and torn
# down on shutdown. Handlers never touch them directly; they receive a
# gateway/store built on top of them via app/dependencies.py.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
# =============================================================================

from __future__ import annotations

import logging

import httpx
from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """Error creating or using the Supabase connections."""

    def __init__(self, message: str, code: str = "SUPABASE_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class SupabaseClient:
    """
    Singleton holder for the Supabase client and the auth HTTP client.

    All methods are class methods; there is exactly one set of connections
    per process.
    """

    _instance: Client | None = None
    _http: httpx.AsyncClient | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, which is required for admin user
        management and bypasses Row Level Security.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                ) from e
        return cls._instance

    @classmethod
    def get_http_client(cls) -> httpx.AsyncClient:
        """Get or create the shared async HTTP client for the Auth REST API."""
        if cls._http is None or cls._http.is_closed:
            cls._http = httpx.AsyncClient(
                base_url=settings.auth_base_url,
                timeout=settings.AUTH_HTTP_TIMEOUT,
                headers={"apikey": settings.SUPABASE_ANON_KEY},
            )
        return cls._http

    @classmethod
    def startup(cls) -> None:
        """Eagerly create both connections so misconfiguration fails at boot."""
        cls.get_client()
        cls.get_http_client()

    @classmethod
    async def shutdown(cls) -> None:
        """Close the HTTP client and drop the Supabase client."""
        if cls._http is not None:
            await cls._http.aclose()
            cls._http = None
        cls._instance = None
        logger.info("Supabase connections closed")
