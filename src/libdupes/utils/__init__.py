"""
Utility modules for libdupes.

This package contains:
- The exception hierarchy
- Logging configuration and timing helpers
"""

from .exceptions import (
    ConfigurationError,
    DetectionCancelledError,
    DetectionError,
    DuplicateViewError,
    LibDupesError,
    StoreError,
    ValidationError,
)
from .logging import ColoredFormatter, PerformanceLogger, get_logger, setup_logging

__all__ = [
    # Exceptions
    "LibDupesError",
    "StoreError",
    "DuplicateViewError",
    "DetectionError",
    "DetectionCancelledError",
    "ValidationError",
    "ConfigurationError",
    # Logging
    "setup_logging",
    "get_logger",
    "PerformanceLogger",
    "ColoredFormatter",
]
