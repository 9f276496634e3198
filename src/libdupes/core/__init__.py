"""
Core functionality for libdupes.

This package contains the data models and configuration shared by the
detection engine, the item stores and the command line.
"""

from .config import (
    CompositePassConfig,
    DuplicatesConfig,
    ExactPassConfig,
    LibDupesConfig,
    LoggingConfig,
    LogLevel,
    TitlePassConfig,
    load_config,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from .models import (
    CandidateRow,
    Collation,
    Creator,
    CreatorMode,
    DetectionStats,
    DuplicateView,
    Item,
)

__all__ = [
    # Configuration
    "LibDupesConfig",
    "DuplicatesConfig",
    "ExactPassConfig",
    "CompositePassConfig",
    "TitlePassConfig",
    "LoggingConfig",
    "LogLevel",
    # Config utilities
    "load_config",
    "load_config_from_dict",
    "save_config",
    "merge_configs",
    # Models
    "Item",
    "Creator",
    "CreatorMode",
    "CandidateRow",
    "Collation",
    "DuplicateView",
    "DetectionStats",
]
