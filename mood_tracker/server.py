"""
FastAPI server for the Mood Tracker backend.

This module exposes the mood commands to the desktop frontend over a local
HTTP API: saving and loading the current mood, reporting where it is
stored, and managing the dated mood journal.
"""

import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

import typer
import uvicorn
from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from .config import StoreConfig
from .errors import JournalFormatError, MoodStoreError
from .journal import MoodJournal
from .models import Mood, MoodEntry, MoodStats, StoragePath
from .store import MoodStore

logger = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "Mood saved successfully!"


# API Request/Response Schemas
class MoodUpdate(BaseModel):
    """Payload for mood update requests."""

    mood: int = Field(..., description="The new mood value to set")


class JournalUpdate(MoodUpdate):
    """Payload for recording a journal entry."""

    emotions: list[str] = Field(
        default_factory=list, description="Emotion tags picked for the day"
    )
    notes: str | None = Field(None, description="Free-text journal notes")


class MoodResponse(BaseModel):
    """Response model for the current mood."""

    mood: Mood = Field(..., description="The current mood state")


class MoodSaved(MoodResponse):
    """Response model for a successful save."""

    message: str = Field(SAVE_SUCCESS_MESSAGE, description="Outcome for the user")


class ImportResult(BaseModel):
    """Response model for a journal import."""

    imported: int = Field(..., description="Number of entries imported")


def create_app(mood_store: MoodStore, journal: MoodJournal | None = None) -> FastAPI:
    """
    Create a FastAPI application with the given stores.

    Args:
        mood_store: The MoodStore instance holding the current mood
        journal: The MoodJournal to serve; shares the store's config if omitted

    Returns:
        Configured FastAPI application
    """
    journal = journal or MoodJournal(mood_store.config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        storage = mood_store.resolve_path()
        logger.info(
            "Storing mood data at %s (%s)", storage.path, storage.source.value
        )
        yield

    app = FastAPI(
        title="Mood Tracker",
        description="Storage backend for the Mood Tracker desktop app",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/")
    def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "mood-tracker"}

    # MARK: - Current mood

    @app.get("/mood")
    def load_mood() -> MoodResponse:
        """
        Load the stored mood.

        Returns:
            The stored mood (defaults to 3 when nothing has been saved)
        """
        try:
            return MoodResponse(mood=mood_store.load())
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to load mood: {e}")

    @app.put("/mood")
    def save_mood(mood_update: MoodUpdate) -> MoodSaved:
        """
        Save the current mood, overwriting the previous one.

        Args:
            mood_update: The mood update payload

        Returns:
            The saved mood and a success message
        """
        try:
            saved = mood_store.save(mood_update.mood)
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to save mood: {e}")
        return MoodSaved(mood=saved)

    @app.get("/storage")
    def storage_path() -> StoragePath:
        """Report the mood file location and whether it came from a fallback."""
        return mood_store.resolve_path()

    # MARK: - Journal

    @app.get("/moods")
    def list_moods(
        start: date | None = None, end: date | None = None
    ) -> dict[str, MoodEntry]:
        """List journal entries, optionally within an inclusive date range."""
        try:
            if start is None and end is None:
                return journal.all_moods()
            return journal.moods_in_range(start or date.min, end or date.max)
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to load moods: {e}")

    @app.get("/moods/stats")
    def mood_stats() -> MoodStats:
        try:
            return journal.stats()
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to load moods: {e}")

    @app.get("/moods/export", response_class=PlainTextResponse)
    def export_moods() -> str:
        try:
            return journal.export_json()
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to export moods: {e}")

    @app.post("/moods/import")
    def import_moods(
        payload: dict[str, Any] = Body(...), overwrite: bool = False
    ) -> ImportResult:
        """Merge exported entries into the journal, or replace it."""
        try:
            imported = journal.import_json(json.dumps(payload), overwrite=overwrite)
        except JournalFormatError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to import moods: {e}")
        return ImportResult(imported=imported)

    @app.get("/moods/{day}")
    def get_day_mood(day: date) -> MoodEntry:
        try:
            entry = journal.get_mood(day)
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to load moods: {e}")
        if entry is None:
            raise HTTPException(status_code=404, detail=f"No mood recorded for {day}")
        return entry

    @app.put("/moods/{day}")
    def save_day_mood(day: date, update: JournalUpdate) -> MoodEntry:
        try:
            return journal.save_mood(
                day, update.mood, emotions=update.emotions, notes=update.notes
            )
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to save mood: {e}")

    @app.delete("/moods/{day}")
    def delete_day_mood(day: date) -> dict[str, bool]:
        try:
            return {"deleted": journal.delete_mood(day)}
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to delete mood: {e}")

    @app.delete("/moods")
    def clear_moods() -> dict[str, str]:
        try:
            journal.clear()
        except MoodStoreError as e:
            raise HTTPException(status_code=500, detail=f"Failed to clear moods: {e}")
        return {"status": "cleared"}

    return app


_config = StoreConfig.from_env()
app = create_app(MoodStore(_config), MoodJournal(_config))


def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    log_level: str = typer.Option("info", "--log-level", help="uvicorn log level"),
) -> None:
    """Run the Mood Tracker API server."""
    uvicorn.run(
        "mood_tracker.server:app",
        host=host,
        port=port,
        log_level=log_level,
    )


def main() -> None:
    """Main entry point for the server."""
    typer.run(serve)


if __name__ == "__main__":
    main()
