"""
Shared utilities for the organizer.
"""

from .file_utils import (
    collect_files,
    files_identical,
    format_bytes,
    setup_logging,
)

__all__ = [
    "collect_files",
    "files_identical",
    "format_bytes",
    "setup_logging",
]
