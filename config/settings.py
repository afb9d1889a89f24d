"""
App-wide configuration and settings.

Defaults can be overridden by a JSON file (path taken from $YTFETCH_SETTINGS,
falling back to ytfetch_settings.json in the current directory). The file is
only ever read; ytfetch never writes it.
"""

import os
import json

SETTINGS_ENV = "YTFETCH_SETTINGS"
SETTINGS_FILE = "ytfetch_settings.json"

# Defaults
DEFAULTS = {
    "audio_formats": ["mp3", "flac", "aac", "m4a", "opus", "vorbis", "wav"],
    "video_formats": ["mp4", "flv", "ogg", "webm", "mkv", "avi"],
    "music_env": "MUSIC",          # preferred folder for audio files
    "videos_env": "VIDEOS",        # preferred folder for video files
    "audio_quality": "bestaudio",
    "video_quality": "bestvideo+bestaudio",
}


def settings_path() -> str:
    """Where the optional settings file lives."""
    return os.environ.get(SETTINGS_ENV) or SETTINGS_FILE


def load_settings() -> dict:
    """Load settings from disk, falling back to defaults."""
    settings = DEFAULTS.copy()
    path = settings_path()
    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                saved = json.load(f)
            settings.update({k: v for k, v in saved.items() if k in DEFAULTS})
        except (json.JSONDecodeError, IOError, AttributeError):
            pass
    return settings


def get(key: str):
    """Get a single setting value."""
    return load_settings().get(key, DEFAULTS.get(key))
