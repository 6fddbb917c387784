# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the ApplyTrack API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3001
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import (
    ApplyTrackException,
    applytrack_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, bursaries, universities
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the Supabase client and the auth HTTP client
    - Shutdown: close them
    """
    logger.info(f"Starting ApplyTrack API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    SupabaseClient.startup()

    yield

    logger.info("Shutting down ApplyTrack API")
    await SupabaseClient.shutdown()


# Create FastAPI application
app = FastAPI(
    title="ApplyTrack API",
    description="""
## Bursary and University Application Tracking

Sign up, sign in, and keep track of the bursaries and universities you are
interested in and have applied to.

### Authentication

`POST /api/login` returns `auth.idToken`. Send it on every other endpoint:

```
Authorization: Bearer <idToken>
```

### Quick Start

```bash
curl -X POST http://localhost:3001/api/signup \\
  -H "Content-Type: application/json" \\
  -d '{"fullName": "Jane Doe", "email": "jane@x.com", "password": "secret123"}'

curl -X POST http://localhost:3001/api/universities/click \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"universityId": "uni_1"}'

curl -X POST http://localhost:3001/api/universities/applied \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"universityId": "uni_1"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Signup and password login",
        },
        {
            "name": "Bursaries",
            "description": "Track clicked bursaries",
        },
        {
            "name": "Universities",
            "description": "Track clicked and applied universities",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - answers preflight OPTIONS requests before routing
_allow_any_origin = "*" in settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if _allow_any_origin else settings.cors_origins_list,
    allow_credentials=not _allow_any_origin,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ApplyTrackException, applytrack_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Signup / login (public)
app.include_router(
    auth_routes.router,
    prefix=settings.API_PREFIX,
    tags=["Auth"]
)

# Bursary tracking
app.include_router(
    bursaries.router,
    prefix=settings.API_PREFIX,
    tags=["Bursaries"]
)

# University tracking
app.include_router(
    universities.router,
    prefix=settings.API_PREFIX,
    tags=["Universities"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=settings.API_PREFIX,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Returns API info."""
    return {
        "name": "ApplyTrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health",
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG and settings.is_development,
    )


if __name__ == "__main__":
    run()
