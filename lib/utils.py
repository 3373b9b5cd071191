# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any


# =============================================================================
# Name Utilities
# =============================================================================

def normalize_image_key(name: str) -> str:
    """
    Normalize a character name into a storage key.

    Lowercases the name and removes every space so the same character
    always maps to the same image location.

    Args:
        name: Character display name

    Returns:
        Normalized key

    Example:
        normalize_image_key("Master Roshi")  # "masterroshi"
    """
    return name.lower().replace(" ", "")


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


class StoreUnavailableError(ApplicationError):
    """Raised when the character store backend cannot be reached."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code="STORE_UNAVAILABLE",
            suggestion="Check the storage backend connection settings",
            details=details,
        )
