"""
Errors raised by the mood storage layer.

Every error carries the path it concerns and a message that embeds the
underlying OS or parse error text, ready to be shown to the user.
"""

from pathlib import Path


class MoodStoreError(Exception):
    """Base class for storage failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class DirectoryCreateError(MoodStoreError):
    """The storage directory could not be created."""


class MoodWriteError(MoodStoreError):
    """The mood file could not be written."""


class MoodReadError(MoodStoreError):
    """The mood file exists but could not be read."""


class MoodParseError(MoodStoreError):
    """The mood file does not contain a valid integer."""


class JournalFormatError(MoodStoreError):
    """Journal data is not a valid mapping of dates to entries."""
