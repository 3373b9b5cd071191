# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.utils import StoreUnavailableError

logger = logging.getLogger(__name__)


class CatalogException(Exception):
    """
    Base exception for the character catalog API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Character Exceptions
# =============================================================================

class CharacterNotFoundError(CatalogException):
    """Raised when a character ID doesn't exist."""

    def __init__(self, character_id: int):
        super().__init__(
            message=f"Character not found: {character_id}",
            code="CHARACTER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the character id is correct; GET /api/characters lists all ids",
            details={"character_id": character_id},
        )


# =============================================================================
# Image Exceptions
# =============================================================================

class InvalidImageTypeError(CatalogException):
    """Raised when an uploaded image has a content type that isn't allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid image type: {content_type}",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Only these image types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class ImageTooLargeError(CatalogException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"Image too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="IMAGE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb},
        )


class ImageUploadError(CatalogException):
    """Raised when storing an image fails."""

    def __init__(self, error: str):
        super().__init__(
            message="Failed to upload image to storage",
            code="IMAGE_UPLOAD_FAILED",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """
    Convert CatalogException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def store_unavailable_handler(
    request: Request,
    exc: StoreUnavailableError
) -> JSONResponse:
    """
    Map store outages to 503.

    The backend error is logged but not returned, so connection strings
    and driver messages never reach the client.
    """
    logger.error(f"Character store unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "detail": "The character store is currently unavailable",
            "code": exc.code,
            "suggestion": "Try again later or contact support if the issue persists",
        }
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
