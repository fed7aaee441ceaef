"""
Command-line interface tools for the Mood Tracker backend.
"""

import json
from collections.abc import Callable
from datetime import date, datetime
from typing import Any, Optional

import httpx
import typer

from .models import Mood, MoodEntry, MoodStats, PathSource, StoragePath, mood_label

DEFAULT_BASE_URL = "http://localhost:8000"

app = typer.Typer(help="Mood Tracker CLI tools")


# MARK: - CLI Entry Points


def cli_set_mood() -> None:
    """Entry point for mood-set CLI command."""
    typer.run(set_mood)


def cli_get_mood() -> None:
    """Entry point for mood-get CLI command."""
    typer.run(get_mood)


# MARK: - Commands


@app.command("set")
def set_mood(
    mood: int = typer.Argument(..., help="The mood value to save"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
) -> None:
    """Save the current mood."""

    def _set_mood() -> None:
        with _client(base_url) as client:
            response = client.put("/mood", json={"mood": mood})
            response.raise_for_status()
            result = response.json()
            saved = Mood.model_validate(result["mood"])
            print(result["message"])
            print(f"Mood: {_format_mood(saved.value)}")

    _run_with_error_handling(_set_mood, base_url)


@app.command("get")
def get_mood(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Load the current mood."""

    def _get_mood() -> None:
        with _client(base_url) as client:
            response = client.get("/mood")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            mood = Mood.model_validate(result["mood"])
            print(_format_mood(mood.value))

    _run_with_error_handling(_get_mood, base_url)


@app.command()
def where(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
) -> None:
    """Show where the service stores the current mood."""

    def _where() -> None:
        with _client(base_url) as client:
            response = client.get("/storage")
            response.raise_for_status()
            storage = StoragePath.model_validate(response.json())
            print(storage.path)
            if storage.source == PathSource.CWD:
                print("Note: app-data directory not set, using working directory")

    _run_with_error_handling(_where, base_url)


@app.command()
def log(
    mood: int = typer.Argument(..., help="The mood value to record"),
    day: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=["%Y-%m-%d"], help="Day to record (default today)"
    ),
    emotions: Optional[list[str]] = typer.Option(
        None, "--emotion", "-e", help="Emotion felt that day (repeatable)"
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Journal notes"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
) -> None:
    """Record a mood in the journal for a day."""
    key = (day.date() if day else date.today()).isoformat()

    def _log() -> None:
        with _client(base_url) as client:
            response = client.put(
                f"/moods/{key}",
                json={"mood": mood, "emotions": emotions or [], "notes": notes},
            )
            response.raise_for_status()
            entry = MoodEntry.model_validate(response.json())
            print(_format_entry(entry))

    _run_with_error_handling(_log, base_url)


@app.command()
def history(
    start: Optional[datetime] = typer.Option(
        None, "--start", "-s", formats=["%Y-%m-%d"], help="First day to include"
    ),
    end: Optional[datetime] = typer.Option(
        None, "--end", "-e", formats=["%Y-%m-%d"], help="Last day to include"
    ),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """List journal entries."""
    params = {}
    if start:
        params["start"] = start.date().isoformat()
    if end:
        params["end"] = end.date().isoformat()

    def _history() -> None:
        with _client(base_url) as client:
            response = client.get("/moods", params=params)
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            if not result:
                print("No moods recorded")
                return

            for key in sorted(result):
                print(_format_entry(MoodEntry.model_validate(result[key])))

    _run_with_error_handling(_history, base_url)


@app.command()
def stats(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Tracker service"
    ),
) -> None:
    """Summarize the mood journal."""

    def _stats() -> None:
        with _client(base_url) as client:
            response = client.get("/moods/stats")
            response.raise_for_status()
            summary = MoodStats.model_validate(response.json())

            print(f"Entries: {summary.total_entries}")
            if not summary.total_entries:
                return
            print(f"Average: {summary.average_mood:.2f}")
            print(f"Most common: {_format_mood(summary.most_common_mood)}")
            for mood, count in sorted(summary.mood_counts.items()):
                print(f"  {_format_mood(mood)}: {count}")

    _run_with_error_handling(_stats, base_url)


# MARK: - Private Helpers


def _client(base_url: str) -> httpx.Client:
    """Create an HTTP client for the service."""
    return httpx.Client(base_url=base_url)


def _format_mood(value: int) -> str:
    """Format a mood value with its label when it has one."""
    label = mood_label(value)
    return f"{value} ({label})" if label else str(value)


def _format_entry(entry: MoodEntry) -> str:
    parts = [f"{entry.date} > {_format_mood(entry.mood_index)}"]
    if entry.emotions:
        parts.append(", ".join(entry.emotions))
    if entry.notes:
        parts.append(entry.notes)
    return " | ".join(parts)


def _error_detail(response: httpx.Response) -> str | None:
    try:
        return response.json().get("detail")
    except ValueError:
        return None


def _run_with_error_handling(fn: Callable[[], Any], base_url: str) -> None:
    """Run a request function with standardized error handling."""
    try:
        fn()
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        detail = _error_detail(e.response)
        suffix = f": {detail}" if isinstance(detail, str) else ""
        print(f"Error: HTTP {e.response.status_code}{suffix}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
