"""
Cache Exceptions

Error contract of the ``Cache`` capability. A miss and a transport failure
are distinct types so callers can fall back silently on one and log the
other.
"""

from typing import Any, Dict, Optional


class CacheException(Exception):
    """Base exception for cache errors.

    Preserves the underlying client error as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class CacheMissException(CacheException):
    """Raised when a key is absent or has expired."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            message=f"Cache miss: {key}",
            error_code="CACHE_MISS",
            details={"key": key},
        )


class CacheTransportException(CacheException):
    """Raised on connectivity, timeout or (de)serialization failures."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {"operation": operation}
        if key:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        message = f"Cache operation '{operation}' failed"
        if key:
            message += f" for {key}"
        if original_error:
            message += f": {original_error}"

        super().__init__(
            message=message, error_code="CACHE_TRANSPORT_ERROR", details=details
        )
        self.operation = operation
        self.key = key
        # Preserve exception context for debugging (exception chaining)
        if original_error:
            self.__cause__ = original_error
