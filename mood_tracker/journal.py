"""
Dated mood history for the Mood Tracker backend.

The journal keeps one entry per calendar day in a JSON file next to the
current-mood file. It is independent of MoodStore: saving a mood for a day
does not change the current mood, and vice versa.
"""

import json
import logging
import time
from collections import Counter
from datetime import date
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .config import StoreConfig
from .errors import (
    DirectoryCreateError,
    JournalFormatError,
    MoodReadError,
    MoodWriteError,
)
from .models import MoodEntry, MoodStats

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(dict[str, MoodEntry])


def date_key(day: date) -> str:
    """Format a day as a journal key (YYYY-MM-DD)."""
    return day.isoformat()


def _check_keys(entries: dict[str, MoodEntry], path: Path | None) -> None:
    """Keys must be canonical YYYY-MM-DD days matching their entry's date."""
    for key, entry in entries.items():
        try:
            canonical = date.fromisoformat(key).isoformat()
        except ValueError as e:
            raise JournalFormatError(
                f"Invalid journal date key {key!r}: {e}", path
            ) from e
        if canonical != key:
            raise JournalFormatError(
                f"Invalid journal date key {key!r}: expected {canonical!r}", path
            )
        if entry.date != key:
            raise JournalFormatError(
                f"Journal entry under {key!r} is dated {entry.date!r}", path
            )


class MoodJournal:
    """JSON-file journal of moods keyed by day."""

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()

    @property
    def path(self) -> Path:
        return self.config.resolve(self.config.journal_filename).path

    # MARK: - Persistence

    def _read(self) -> dict[str, MoodEntry]:
        path = self.path
        if not path.exists():
            return {}

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MoodReadError(f"Could not read {path}: {e}", path) from e

        return self._parse(text, path)

    def _parse(self, text: str, path: Path | None) -> dict[str, MoodEntry]:
        try:
            entries = _ENTRIES.validate_json(text)
        except ValidationError as e:
            raise JournalFormatError(f"Invalid journal data: {e}", path) from e
        _check_keys(entries, path)
        return entries

    def _write(self, entries: dict[str, MoodEntry]) -> None:
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Could not create directory {path.parent}: {e}", path
            ) from e

        try:
            path.write_text(self._dump(entries), encoding="utf-8")
        except OSError as e:
            raise MoodWriteError(f"Could not write {path}: {e}", path) from e

    @staticmethod
    def _dump(entries: dict[str, MoodEntry]) -> str:
        data = {key: entries[key].model_dump() for key in sorted(entries)}
        return json.dumps(data, indent=2)

    # MARK: - Entries

    def save_mood(
        self,
        day: date,
        mood_index: int,
        emotions: list[str] | None = None,
        notes: str | None = None,
    ) -> MoodEntry:
        """
        Record the mood for a day, replacing any earlier entry for it.

        Args:
            day: The day the entry belongs to
            mood_index: The mood value for the day
            emotions: Emotion tags picked for the day
            notes: Free-text journal notes

        Returns:
            The stored entry
        """
        key = date_key(day)
        entry = MoodEntry(
            date=key,
            mood_index=mood_index,
            timestamp=time.time(),
            emotions=emotions or [],
            notes=notes,
        )
        entries = self._read()
        entries[key] = entry
        self._write(entries)
        logger.info("Journal mood %d saved for %s", mood_index, key)
        return entry

    def get_mood(self, day: date) -> MoodEntry | None:
        return self._read().get(date_key(day))

    def all_moods(self) -> dict[str, MoodEntry]:
        return self._read()

    def moods_in_range(self, start: date, end: date) -> dict[str, MoodEntry]:
        """Entries whose day falls within [start, end]."""
        start_key, end_key = date_key(start), date_key(end)
        return {
            key: entry
            for key, entry in self._read().items()
            if start_key <= key <= end_key
        }

    def delete_mood(self, day: date) -> bool:
        """
        Remove the entry for a day.

        Returns:
            True if an entry was removed, False if there was none
        """
        entries = self._read()
        removed = entries.pop(date_key(day), None)
        if removed is None:
            return False
        self._write(entries)
        logger.info("Journal entry for %s deleted", date_key(day))
        return True

    def clear(self) -> None:
        self._write({})
        logger.info("Journal cleared")

    # MARK: - Export / Import

    def export_json(self) -> str:
        return self._dump(self._read())

    def import_json(self, text: str, overwrite: bool = False) -> int:
        """
        Load entries from exported JSON.

        Args:
            text: A JSON object mapping date keys to entries
            overwrite: Replace the journal instead of merging into it

        Returns:
            The number of imported entries
        """
        imported = self._parse(text, None)
        entries = imported if overwrite else {**self._read(), **imported}
        self._write(entries)
        logger.info("Imported %d journal entries", len(imported))
        return len(imported)

    # MARK: - Statistics

    def stats(self) -> MoodStats:
        entries = list(self._read().values())
        if not entries:
            return MoodStats()

        counts = Counter(entry.mood_index for entry in entries)
        top = max(counts.values())
        most_common = min(mood for mood, count in counts.items() if count == top)

        return MoodStats(
            total_entries=len(entries),
            mood_counts=dict(sorted(counts.items())),
            average_mood=sum(entry.mood_index for entry in entries) / len(entries),
            most_common_mood=most_common,
        )
