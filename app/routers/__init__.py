# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - bursaries.py: Bursary click tracking
# - universities.py: University click and applied tracking
#
# Signup/login live in app/auth/routes.py. Each router is mounted in
# main.py under settings.API_PREFIX.
# =============================================================================

from . import health
from . import bursaries
from . import universities

__all__ = [
    "health",
    "bursaries",
    "universities",
]
