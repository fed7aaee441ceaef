"""
Storage configuration for the Mood Tracker backend.

The layout is `<app-data-dir>/<app_dir_name>/<filename>`. The app-data
directory is an explicitly configured base directory when one is set,
otherwise the directory named by an environment variable, otherwise the
current working directory.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from .models import PathSource, StoragePath

logger = logging.getLogger(__name__)

DATA_DIR_OVERRIDE_VAR = "MOOD_TRACKER_DATA_DIR"


class StoreConfig(BaseModel):
    """Where and how mood data is stored."""

    base_dir: Path | None = Field(
        None, description="Explicit app-data directory; skips env lookup"
    )
    env_var: str = Field("APPDATA", description="Variable naming the app-data dir")
    app_dir_name: str = Field("MoodTracker", description="Subfolder for app data")
    mood_filename: str = Field("mood_data.txt", description="Current mood file")
    journal_filename: str = Field("moods.json", description="Mood journal file")
    default_mood: int = Field(3, description="Mood returned when none is stored")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StoreConfig":
        """Build a config, honouring the data directory override variable."""
        environ = os.environ if environ is None else environ
        override = environ.get(DATA_DIR_OVERRIDE_VAR)
        if override:
            return cls(base_dir=Path(override))
        return cls()

    def resolve_app_data_dir(
        self, environ: Mapping[str, str] | None = None
    ) -> tuple[Path, PathSource]:
        """Pick the app-data directory and report where it came from."""
        if self.base_dir is not None:
            return self.base_dir, PathSource.CONFIGURED

        environ = os.environ if environ is None else environ
        value = environ.get(self.env_var)
        if value:
            return Path(value), PathSource.ENVIRONMENT

        cwd = Path.cwd()
        logger.warning(
            "%s is not set; storing mood data under the working directory %s",
            self.env_var,
            cwd,
        )
        return cwd, PathSource.CWD

    def resolve(
        self, filename: str, environ: Mapping[str, str] | None = None
    ) -> StoragePath:
        """Resolve the full path of a file inside the application folder."""
        base, source = self.resolve_app_data_dir(environ)
        path = base / self.app_dir_name / filename
        logger.debug("Resolved %s to %s (%s)", filename, path, source.value)
        return StoragePath(path=path, source=source)
