"""
Application configuration management for GolfTrack.

Handles settings storage, map-provider credentials, and location
preferences. Settings are persisted to ~/.golftrack/config.json
(or $GOLFTRACK_HOME/config.json when that variable is set).

Components that need settings receive a Config instance rather than
reading process-wide state; Config.instance() provides the shared
default for the CLI.
"""

import json
import os
from pathlib import Path
from typing import Optional

from golftrack.utils.constants import (
    DEFAULT_HEAT_MAP_GRID_SIZE,
    DEFAULT_LOCATION_MAXIMUM_AGE_MS,
    DEFAULT_LOCATION_TIMEOUT_MS,
    MAX_SHOT_DISTANCE,
    REFRESH_INTERVAL_S,
    REFRESH_MAXIMUM_AGE_MS,
)


def default_app_dir() -> Path:
    """Resolve the application data directory."""
    env_home = os.environ.get("GOLFTRACK_HOME", "")
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".golftrack"


class Config:
    """Manages application settings with JSON file persistence."""

    _defaults = {
        "location_provider": "mock",     # "mock", "static"
        "mock_preset": "good_signal",
        "location_timeout_ms": DEFAULT_LOCATION_TIMEOUT_MS,
        "location_maximum_age_ms": DEFAULT_LOCATION_MAXIMUM_AGE_MS,
        "refresh_interval_s": REFRESH_INTERVAL_S,
        "refresh_maximum_age_ms": REFRESH_MAXIMUM_AGE_MS,
        "max_shot_distance": MAX_SHOT_DISTANCE,
        "heat_map_grid_size": DEFAULT_HEAT_MAP_GRID_SIZE,
        "trend_window": "week",
        "mapbox_token": "",
        "google_maps_api_key": "",
    }

    _instance: Optional["Config"] = None

    def __init__(self, app_dir: Optional[Path] = None):
        self._app_dir = Path(app_dir) if app_dir else default_app_dir()
        self._config_file = self._app_dir / "config.json"
        self._db_path = self._app_dir / "golftrack.db"
        self._settings: dict = {}
        self._load()

    @classmethod
    def instance(cls) -> "Config":
        """Shared default configuration, created on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _load(self):
        """Load settings from disk, merging with defaults."""
        self._app_dir.mkdir(parents=True, exist_ok=True)

        if self._config_file.exists():
            try:
                with open(self._config_file) as f:
                    saved = json.load(f)
                # Merge: defaults first, then saved values override
                self._settings = {**self._defaults, **saved}
            except (json.JSONDecodeError, OSError):
                self._settings = dict(self._defaults)
        else:
            self._settings = dict(self._defaults)

    def save(self):
        """Persist current settings to disk."""
        self._app_dir.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, "w") as f:
            json.dump(self._settings, f, indent=2)

    def get(self, key: str, default=None):
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value):
        """Set a setting value and save."""
        self._settings[key] = value
        self.save()

    def clear(self, key: str):
        """Revert a setting to its default (or remove it) and save."""
        if key in self._defaults:
            self._settings[key] = self._defaults[key]
        else:
            self._settings.pop(key, None)
        self.save()

    def get_db_path(self) -> Path:
        """Get the SQLite database file path."""
        self._app_dir.mkdir(parents=True, exist_ok=True)
        return self._db_path

    def get_app_dir(self) -> Path:
        """Get the application data directory."""
        self._app_dir.mkdir(parents=True, exist_ok=True)
        return self._app_dir
