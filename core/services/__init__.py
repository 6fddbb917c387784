# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .account_service import AccountService
from .tracking_service import TrackingService

__all__ = [
    "AccountService",
    "TrackingService",
]
