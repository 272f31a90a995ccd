"""
Error Definitions

Defines custom exception classes used in the application for unified error handling.
Every error maps to exactly one HTTP status at the API boundary.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether to attach `details` to the payload

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class ValidationError(AppError):
    """
    Parameter Validation Error

    Raised when request input is missing or malformed (e.g., empty key).
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=400,
        )


class NotFoundError(AppError):
    """
    Resource Not Found Error

    Raised when a key does not exist, has expired or was already deleted.
    """

    def __init__(
        self,
        message: str = "Key not found",
        code: str = "key_not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
            status_code=404,
        )


class StoreError(AppError):
    """
    Store Error

    Raised for any failure talking to or reported by the key-value store,
    including timeouts, connectivity loss and malformed replies.
    """

    def __init__(
        self,
        message: str = "Key-value store error",
        code: str = "store_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="store_error",
            code=code,
            details=details,
            status_code=500,
        )
