"""
Tests for storage path resolution.
"""

import logging
from pathlib import Path

from mood_tracker.config import StoreConfig
from mood_tracker.models import PathSource
from mood_tracker.store import MoodStore


class TestStoreConfig:
    """Test suite for StoreConfig path resolution."""

    def test_configured_base_dir(self, tmp_path, monkeypatch):
        """Test an explicit base directory wins over the environment."""
        monkeypatch.setenv("APPDATA", str(tmp_path / "ignored"))
        resolved = StoreConfig(base_dir=tmp_path).resolve("mood_data.txt")

        assert resolved.path == tmp_path / "MoodTracker" / "mood_data.txt"
        assert resolved.source == PathSource.CONFIGURED

    def test_environment_base_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APPDATA", str(tmp_path))
        resolved = MoodStore().resolve_path()

        assert resolved.path == tmp_path / "MoodTracker" / "mood_data.txt"
        assert resolved.source == PathSource.ENVIRONMENT

    def test_explicit_environ_mapping(self, tmp_path):
        config = StoreConfig(env_var="XDG_DATA_HOME")
        resolved = config.resolve("moods.json", {"XDG_DATA_HOME": str(tmp_path)})

        assert resolved.path == tmp_path / "MoodTracker" / "moods.json"

    def test_cwd_fallback(self, tmp_path, monkeypatch, caplog):
        """Test an unset variable falls back to the working directory, loudly."""
        monkeypatch.delenv("APPDATA", raising=False)
        monkeypatch.chdir(tmp_path)

        with caplog.at_level(logging.WARNING, logger="mood_tracker.config"):
            resolved = MoodStore().resolve_path()

        assert resolved.path == tmp_path / "MoodTracker" / "mood_data.txt"
        assert resolved.source == PathSource.CWD
        assert "APPDATA is not set" in caplog.text

    def test_empty_variable_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APPDATA", "")
        monkeypatch.chdir(tmp_path)

        assert MoodStore().resolve_path().source == PathSource.CWD

    def test_cwd_fallback_round_trip(self, tmp_path, monkeypatch):
        """Test both operations work against ./MoodTracker when unset."""
        monkeypatch.delenv("APPDATA", raising=False)
        monkeypatch.chdir(tmp_path)
        store = MoodStore()

        assert store.load().value == 3
        store.save(5)
        assert store.load().value == 5
        assert (tmp_path / "MoodTracker" / "mood_data.txt").read_text() == "5"

    def test_from_env_override(self, tmp_path):
        config = StoreConfig.from_env({"MOOD_TRACKER_DATA_DIR": str(tmp_path)})
        assert config.base_dir == Path(tmp_path)

    def test_from_env_without_override(self):
        assert StoreConfig.from_env({}).base_dir is None
