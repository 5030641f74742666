"""
Repository Exceptions

Store-level errors. They propagate through the cache layer unchanged and are
mapped to HTTP outcomes by the API layer.
"""

from typing import Any, Dict, Optional, Union


class RepositoryException(Exception):
    """Base exception for store failures."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or "REPOSITORY_ERROR"
        self.details = details or {}
        super().__init__(self.message)
        if original_error:
            self.__cause__ = original_error


class EntityNotFoundException(RepositoryException):
    """Raised when the requested entity does not exist."""

    def __init__(self, kind: str, id: Union[int, str, None]):
        super().__init__(
            message=f"{kind} not found: {id}",
            error_code="ENTITY_NOT_FOUND",
            details={"kind": kind, "id": str(id)},
        )
        self.kind = kind
        self.id = id


class EntityConflictException(RepositoryException):
    """Raised when a write violates a uniqueness or integrity constraint."""

    def __init__(self, kind: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=f"{kind} conflicts with an existing record",
            error_code="ENTITY_CONFLICT",
            details={"kind": kind},
            original_error=original_error,
        )
        self.kind = kind
