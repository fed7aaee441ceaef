"""
Mood storage implementation for the Mood Tracker backend.

This module provides a file-backed store for the current mood. The mood is
kept as the decimal text of a single integer in a per-user data file which
every save overwrites in full. Calls are synchronous and blocking; the
application issues one save per mood selection and one load at startup.
"""

import logging
import re

from .config import StoreConfig
from .errors import (
    DirectoryCreateError,
    MoodParseError,
    MoodReadError,
    MoodWriteError,
)
from .models import Mood, StoragePath

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_mood(text: str) -> int:
    """
    Parse the contents of a mood file.

    Surrounding ASCII whitespace is ignored; anything else that is not a plain
    decimal integer raises ValueError.
    """
    stripped = text.strip(" \t\r\n")
    if not _INTEGER_RE.fullmatch(stripped):
        raise ValueError(f"not an integer: {text!r}")
    return int(stripped)


class MoodStore:
    """
    File-backed storage for the latest mood value.

    The storage path is resolved on every call, so a change to the
    environment between calls is picked up the same way a fresh process
    would pick it up.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()

    def resolve_path(self) -> StoragePath:
        """Return the mood file location and how it was chosen."""
        return self.config.resolve(self.config.mood_filename)

    def save(self, mood: int) -> Mood:
        """
        Persist a mood value, replacing any previously stored one.

        Args:
            mood: The mood value to store (not range checked)

        Returns:
            The stored Mood

        Raises:
            DirectoryCreateError: The data directory could not be created
            MoodWriteError: The file could not be written
        """
        path = self.resolve_path().path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Could not create directory {path.parent}: {e}", path
            ) from e

        try:
            path.write_text(str(mood), encoding="utf-8")
        except OSError as e:
            raise MoodWriteError(f"Could not write {path}: {e}", path) from e

        logger.info("Saved mood %d to %s", mood, path)
        return Mood(value=mood)

    def load(self) -> Mood:
        """
        Read the stored mood.

        Returns:
            The stored Mood, or the configured default when no file exists

        Raises:
            MoodReadError: The file exists but could not be read
            MoodParseError: The file does not hold a valid integer
        """
        path = self.resolve_path().path

        if not path.exists():
            logger.debug("No mood file at %s, using default", path)
            return Mood(value=self.config.default_mood)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MoodReadError(f"Could not read {path}: {e}", path) from e

        try:
            value = parse_mood(content)
        except ValueError as e:
            raise MoodParseError(f"Could not parse {path}: {e}", path) from e

        return Mood(value=value)
