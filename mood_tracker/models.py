"""
Shared data models for the Mood Tracker backend.

This module defines the core domain models used across multiple layers
of the application (storage, CLI, API).
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

MOOD_LABELS: dict[int, str] = {
    1: "Sad",
    2: "Worried",
    3: "Neutral",
    4: "Happy",
    5: "Excited",
}


def mood_label(value: int) -> str | None:
    """Return the frontend's label for a mood value, if it has one."""
    return MOOD_LABELS.get(value)


class Mood(BaseModel):
    """Represents the current mood state."""

    value: int = Field(..., description="The current mood value")


class PathSource(str, Enum):
    """Where the app-data directory was taken from."""

    CONFIGURED = "configured"
    ENVIRONMENT = "environment"
    CWD = "cwd"


class StoragePath(BaseModel):
    """A resolved storage location and how it was chosen."""

    path: Path = Field(..., description="Absolute or cwd-relative file path")
    source: PathSource = Field(..., description="Origin of the base directory")


class MoodEntry(BaseModel):
    """A journal entry for one calendar day."""

    date: str = Field(..., description="Day in YYYY-MM-DD format")
    mood_index: int = Field(..., description="Mood value recorded for the day")
    timestamp: float = Field(..., description="Unix timestamp of the recording")
    emotions: list[str] = Field(
        default_factory=list, description="Emotion tags picked for the day"
    )
    notes: str | None = Field(None, description="Free-text journal notes")


class MoodStats(BaseModel):
    """Summary statistics over the mood journal."""

    total_entries: int = 0
    mood_counts: dict[int, int] = Field(default_factory=dict)
    average_mood: float = 0.0
    most_common_mood: int = 0
