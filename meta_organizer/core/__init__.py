"""
Core types, configuration and timestamp resolution.
"""

from .config import Settings, get_settings
from .errors import EnumerationError, OrganizerError
from .timestamps import TimestampInfo, TimestampResolver
from .types import (
    MEGABYTE,
    ErrorKind,
    FileRecord,
    MoveOutcome,
    OrganizationResult,
    OrganizerConfig,
    OutcomeKind,
    SizeCategory,
    SizeThresholds,
    TimeAttribute,
    TimeSource,
)

__all__ = [
    "MEGABYTE",
    "EnumerationError",
    "ErrorKind",
    "FileRecord",
    "MoveOutcome",
    "OrganizationResult",
    "OrganizerConfig",
    "OrganizerError",
    "OutcomeKind",
    "Settings",
    "SizeCategory",
    "SizeThresholds",
    "TimeAttribute",
    "TimeSource",
    "TimestampInfo",
    "TimestampResolver",
    "get_settings",
]
