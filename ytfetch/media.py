"""
Media module — decides what kind of file we're fetching and where the
source comes from.

The extension of the destination picks everything else:

    song.mp3  → audio: $MUSIC, bestaudio, extract audio to mp3
    clip.mkv  → video: $VIDEOS, bestvideo+bestaudio, recode video to mkv

A source that doesn't look like a YouTube link can be turned into a
"ytsearch:" query instead.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from config import settings as config


YOUTUBE_URL_RE = re.compile(r"(https?://)?(www\.youtube\.com|youtu\.?be)/.+")
SEARCH_PREFIX = "ytsearch:"


class InvalidFilename(ValueError):
    """The destination has no extension."""


class UnsupportedFormat(ValueError):
    """The extension is neither a known audio nor video format."""


@dataclass(frozen=True, eq=False)
class MediaKind:
    category: str                 # "audio" | "video"
    extension: str                # without the dot
    env_var: str                  # where the preferred folder is configured
    format: str                   # yt-dlp format selector
    postprocessor: dict = field(default_factory=dict)

    @property
    def is_audio(self) -> bool:
        return self.category == "audio"


def classify(filepath, settings: Optional[dict] = None) -> MediaKind:
    """
    Work out the MediaKind for a destination path.

    Raises:
        InvalidFilename: The path has no extension.
        UnsupportedFormat: The extension isn't in the audio or video list.
    """
    settings = settings or config.load_settings()
    filepath = Path(filepath)

    ext = filepath.suffix[1:]
    if not ext or not filepath.stem:
        raise InvalidFilename(f"Invalid Filename! {filepath}")

    if ext in settings["audio_formats"]:
        return MediaKind(
            category="audio",
            extension=ext,
            env_var=settings["music_env"],
            format=settings["audio_quality"],
            postprocessor={"key": "FFmpegExtractAudio", "preferredcodec": ext},
        )
    if ext in settings["video_formats"]:
        return MediaKind(
            category="video",
            extension=ext,
            env_var=settings["videos_env"],
            format=settings["video_quality"],
            # yt-dlp spells it this way
            postprocessor={"key": "FFmpegVideoConvertor", "preferedformat": ext},
        )
    raise UnsupportedFormat(f"Invalid file format! {ext}")


def preferred_parent(kind: MediaKind, environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """The folder named by the kind's env var, or None if it isn't set."""
    environ = os.environ if environ is None else environ
    value = environ.get(kind.env_var)
    return Path(value) if value is not None else None


def is_youtube_url(text: str) -> bool:
    return bool(YOUTUBE_URL_RE.fullmatch(text))


def search_query(text: str) -> str:
    """Turn free text into a yt-dlp YouTube search."""
    return f"{SEARCH_PREFIX}{text}"
