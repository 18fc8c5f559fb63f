"""
Shared error handling for the read-through cache layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error report format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class CacheLayerException(Exception):
    """Base exception for the cache layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(CacheLayerException):
    """Invalid or missing setup, raised before any call proceeds."""

    def __init__(self, message: str = "Invalid cache configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class StoreReadError(CacheLayerException):
    """The key-value store could not be read. Degrades to a miss."""

    def __init__(self, key: str, message: str = "Store read failed", details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details.setdefault("key", key)
        super().__init__("STORE_READ_ERROR", message, details)
        self.key = key


class StoreWriteError(CacheLayerException):
    """The key-value store could not be written. Never raised to callers."""

    def __init__(self, key: str, message: str = "Store write failed", details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details.setdefault("key", key)
        super().__init__("STORE_WRITE_ERROR", message, details)
        self.key = key


class SerializationError(StoreReadError):
    """Stored text or computed data is not a valid JSON document."""

    def __init__(self, key: str, message: str = "Cache entry is not valid JSON", details: Optional[Dict[str, Any]] = None):
        super().__init__(key, message, details)
        self.code = "SERIALIZATION_ERROR"
