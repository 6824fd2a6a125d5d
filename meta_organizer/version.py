"""Version information for meta-organizer."""

__version__ = "0.1.0"
