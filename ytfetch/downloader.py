"""
Downloader module — fetches media with yt-dlp and transcodes it with ffmpeg.

Audio targets use yt-dlp's FFmpegExtractAudio post-processor, video targets
use FFmpegVideoConvertor, so the file on disk ends up with the extension
the user asked for.
"""

from dataclasses import dataclass
from pathlib import Path

import yt_dlp

from ytfetch.media import MediaKind


@dataclass(frozen=True)
class DownloadRequest:
    destination: Path      # absolute, without extension
    kind: MediaKind
    source: str            # URL or "ytsearch:..." query
    verbose: bool = False

    @property
    def target(self) -> str:
        """The path the user will end up with, extension included."""
        return f"{self.destination}.{self.kind.extension}"


def build_options(request: DownloadRequest) -> dict:
    """
    Build the yt-dlp options for a request.

    Options used:
        - 'format': bestaudio for audio, bestvideo+bestaudio for video.
        - 'outtmpl': "<destination>.%(ext)s" so yt-dlp fills in the
          container it downloaded; the post-processor then converts it.
        - 'postprocessors': extract-audio or recode-video to the target ext.
        - 'updatetime': False keeps the file's mtime as the download time.
    """
    # "%" in the destination would be read as a template field
    destination = str(request.destination).replace("%", "%%")

    return {
        "format": request.kind.format,
        "outtmpl": f"{destination}.%(ext)s",
        "postprocessors": [dict(request.kind.postprocessor)],
        "updatetime": False,
        "verbose": request.verbose,
        "quiet": False,
        "no_warnings": False,
    }


def download(request: DownloadRequest) -> int:
    """
    Download request.source into request.destination.

    Returns:
        int: yt-dlp's return code (0 on success).

    Raises:
        yt_dlp.utils.DownloadError: yt-dlp gave up on the source.
    """
    ydl_opts = build_options(request)

    with yt_dlp.YoutubeDL(ydl_opts) as ydl:
        return ydl.download([request.source])
