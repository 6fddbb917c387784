# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, CORS, error handlers, router mounting
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and JSON error rendering
# - dependencies.py: Injected gateway/store/service providers
# - auth/: Bearer-token guard and the signup/login routes
# - routers/: Tracking and health endpoints
#
# The app layer is thin - it handles HTTP concerns and delegates
# business rules to core/services and provider access to lib/.
# =============================================================================
