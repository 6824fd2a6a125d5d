"""
Reorganize a directory tree by file extension, date and size.
"""

from .version import __version__

__all__ = ["__version__"]
