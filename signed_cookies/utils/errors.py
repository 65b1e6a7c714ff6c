"""
Error Handling Utilities
Provides consistent error handling across the application with user-friendly messages.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for programmatic handling."""

    # Client errors (4xx)
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    COOKIE_READ_ERROR = "COOKIE_READ_ERROR"

    # Internal errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: str  # User-friendly error message
    code: ErrorCode  # Error code for programmatic handling
    details: Optional[str] = None  # Additional context
    suggestion: Optional[str] = None  # What user can do to resolve

    class Config:
        use_enum_values = True


# Custom Exception Classes
class BaseAPIException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        status_code: int = 500,
        details: Optional[str] = None,
        suggestion: Optional[str] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for HTTP response."""
        return {
            "error": self.message,
            "code": self.code.value,
            "details": self.details,
            "suggestion": self.suggestion
        }


class CookieReadError(BaseAPIException):
    """
    A signed cookie passed verification but could not be decrypted or deserialized.

    The message is generic. The underlying failure is chained as
    ``__cause__`` so it stays available to server-side logging but never reaches
    the response body.
    """

    def __init__(self, cookie_name: str):
        self.cookie_name = cookie_name
        super().__init__(
            message=ErrorMessages.COOKIE_READ_FAILED,
            code=ErrorCode.COOKIE_READ_ERROR,
            status_code=400,
            suggestion="Clear your cookies for this site and try again."
        )


class CookieConfigurationError(BaseAPIException):
    """A cookie refers to configuration that does not exist (e.g. an unknown encryption provider)."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            suggestion="Check the ENCRYPTION_KEYS and COOKIES settings."
        )


# Error Message Templates
class ErrorMessages:
    """User-friendly error message templates."""

    # General messages
    INTERNAL_ERROR = "An unexpected error occurred. Please try again."
    INVALID_INPUT = "The provided input is invalid."

    # Cookie messages
    COOKIE_READ_FAILED = "Error reading cookie data."
    COOKIE_WRITE_FAILED = "The cookie could not be written."
    UNKNOWN_ENCRYPTION_PROVIDER = "Unknown encryption provider '{provider}'."


def log_error(
    error: Exception,
    context: str,
    additional_data: Optional[Dict[str, Any]] = None
):
    """
    Log error with consistent format and context.

    Args:
        error: The exception that occurred
        context: Description of what was being done when error occurred
        additional_data: Optional additional data to log
    """
    log_data = {
        "context": context,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if additional_data:
        log_data.update(additional_data)

    logger.error(f"Error in {context}", extra=log_data)
