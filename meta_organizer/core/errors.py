"""Exceptions raised by the organizer."""


class OrganizerError(Exception):
    """Base error for the organizer."""


class EnumerationError(OrganizerError):
    """The source directory cannot be scanned at all."""
