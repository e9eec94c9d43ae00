"""
objcache - Core Error Types

Defines the exception hierarchy for the object cache runtime.
All exceptions inherit from ObjcacheError for consistent error handling.

Nothing in the request path raises for a caching failure: backends convert
faults to None/False returns and the factory degrades to a no-op backend.
These types surface configuration problems and structured tool responses.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes carried by structured tool responses."""

    INVALID_INPUT = "INVALID_INPUT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ObjcacheError(Exception):
    """Base exception for all objcache errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ObjcacheError):
    """Raised when configuration is invalid or a backend cannot be built from it."""

    pass


def make_error_response(
    error_code: ErrorCode,
    message: str,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Create a standardized error response for tools.

    Example:
        >>> make_error_response(ErrorCode.INVALID_INPUT, "id is required", {"parameter": "id"})
        {
            "success": False,
            "error_code": "INVALID_INPUT",
            "message": "id is required",
            "details": {"parameter": "id"}
        }
    """
    return {
        "success": False,
        "error_code": error_code.value,
        "message": message,
        "details": context or {},
    }


def extract_error_code(error: Exception) -> ErrorCode:
    """Map an exception raised inside a tool to its ErrorCode."""
    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    return ErrorCode.INTERNAL_ERROR
