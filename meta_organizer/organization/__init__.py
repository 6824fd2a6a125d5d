"""
Organization module for in-place file reorganization.

This module moves files into an <extension>/<YYYY>/<MM>/<DD>/<size>/ tree
with safety features like dry-run mode, byte-exact duplicate detection and
collision-safe renaming.
"""

from .file_organizer import FileOrganizer, organize_directory
from .mover import SafeMover, resolve_naming_conflict
from .strategy import NO_EXTENSION, PathPlanner, classify_size

__all__ = [
    "FileOrganizer",
    "NO_EXTENSION",
    "PathPlanner",
    "SafeMover",
    "classify_size",
    "organize_directory",
    "resolve_naming_conflict",
]
