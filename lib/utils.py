# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - Input checks shared by the request schemas
# - Base error class for the collaborator adapters
# =============================================================================

import re
from typing import Any

# "+" followed by 7-15 digits, e.g. +27123456789
E164_PATTERN = re.compile(r"^\+\d{7,15}$")


# =============================================================================
# Input Checks
# =============================================================================

def is_non_blank(value: Any) -> bool:
    """
    True if value is a str with non-whitespace content.

    Example:
        is_non_blank(" a@b.co ")  # True
        is_non_blank("   ")       # False
        is_non_blank(42)          # False
    """
    return isinstance(value, str) and len(value.strip()) > 0


def normalize_phone(value: Any) -> str | None:
    """
    Return the trimmed phone number if it is E.164-like, else None.

    Example:
        normalize_phone(" +27123456789 ")  # "+27123456789"
        normalize_phone("0123456789")      # None
    """
    if not isinstance(value, str):
        return None
    phone = value.strip()
    return phone if E164_PATTERN.match(phone) else None


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for collaborator adapter errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        details: Additional context for debugging (logged, never returned)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
