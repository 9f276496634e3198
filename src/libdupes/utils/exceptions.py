"""
Exception hierarchy for libdupes.

This module defines the exceptions raised by duplicate detection runs,
item stores and configuration loading.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class LibDupesError(Exception):
    """Base exception for all libdupes errors.

    Provides common functionality for error details and timestamps.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class StoreError(LibDupesError):
    """Item store errors.

    Base class for errors raised while reading candidate rows from, or
    writing results to, the metadata store.
    """

    def __init__(self, operation: str, message: str, **kwargs: Any) -> None:
        """Initialize the store error.

        Args:
            operation: Store operation being attempted (e.g., 'field_rows')
            message: Human-readable error message
            **kwargs: Additional details to store
        """
        super().__init__(f"[{operation}] {message}", kwargs)
        self.operation = operation


class DuplicateViewError(StoreError):
    """Materializing the duplicate id set failed.

    The in-memory duplicate sets computed by the run are still valid;
    only the extraction step is aborted.
    """

    def __init__(
        self,
        message: str = "Could not create duplicate view",
        library_id: Optional[int] = None,
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the duplicate view error.

        Args:
            message: Human-readable error message
            library_id: Library the view was scoped to
            cause: Underlying storage error
            **kwargs: Additional details
        """
        if cause is not None:
            kwargs["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__("create_duplicate_view", message, library_id=library_id, **kwargs)
        self.library_id = library_id
        self.cause = cause


class DetectionError(LibDupesError):
    """Duplicate detection failed."""

    def __init__(self, message: str = "Duplicate detection failed", **kwargs: Any) -> None:
        super().__init__(message, kwargs)


class DetectionCancelledError(DetectionError):
    """Duplicate detection was cancelled between passes.

    Raised when the run's cancel check reports a cancellation request.
    """

    def __init__(
        self,
        message: str = "Duplicate detection cancelled",
        next_pass: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the cancellation error.

        Args:
            message: Human-readable error message
            next_pass: Name of the pass that would have run next
            **kwargs: Additional details
        """
        if next_pass:
            kwargs["next_pass"] = next_pass
        super().__init__(message, **kwargs)
        self.next_pass = next_pass


class ValidationError(LibDupesError):
    """Item data validation failed.

    Raised when an item file contains records that cannot be loaded.
    """

    def __init__(
        self, message: str = "Validation failed", field: Optional[str] = None, **kwargs: Any
    ) -> None:
        """Initialize the validation error.

        Args:
            message: Human-readable error message
            field: Optional name of the field that failed validation
            **kwargs: Additional details
        """
        details = kwargs
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class ConfigurationError(LibDupesError):
    """Configuration error.

    Raised when the configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message
            config_key: Optional configuration key that caused the error
            **kwargs: Additional details
        """
        details = kwargs
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key
