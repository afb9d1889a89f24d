"""
Tests for yt-dlp option building and the download call.

yt_dlp.YoutubeDL is replaced with a fake so nothing hits the network.
"""

import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import settings as config
from ytfetch import downloader
from ytfetch.downloader import DownloadRequest, build_options, download
from ytfetch.media import classify


class FakeYoutubeDL:
    instances = []

    def __init__(self, opts):
        self.opts = opts
        self.urls = None
        FakeYoutubeDL.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def download(self, urls):
        self.urls = urls
        return 0


def _request(name, source="https://youtu.be/abc", verbose=False):
    return DownloadRequest(
        destination=Path("/media/out") / Path(name).stem,
        kind=classify(name, config.DEFAULTS),
        source=source,
        verbose=verbose,
    )


def test_audio_options():
    opts = build_options(_request("song.mp3"))

    assert opts["format"] == "bestaudio"
    assert opts["outtmpl"] == "/media/out/song.%(ext)s"
    assert opts["postprocessors"] == [{"key": "FFmpegExtractAudio", "preferredcodec": "mp3"}]
    assert opts["updatetime"] is False
    assert opts["verbose"] is False


def test_video_options():
    opts = build_options(_request("clip.mkv", verbose=True))

    assert opts["format"] == "bestvideo+bestaudio"
    assert opts["postprocessors"] == [{"key": "FFmpegVideoConvertor", "preferedformat": "mkv"}]
    assert opts["verbose"] is True


def test_percent_in_destination_is_escaped():
    opts = build_options(_request("100%.mp3"))
    assert opts["outtmpl"] == "/media/out/100%%.%(ext)s"


def test_postprocessor_is_a_copy():
    request = _request("song.mp3")
    build_options(request)["postprocessors"][0]["preferredcodec"] = "wav"
    assert request.kind.postprocessor["preferredcodec"] == "mp3"


def test_target_adds_extension_back():
    assert _request("song.opus").target == "/media/out/song.opus"


def test_download_passes_source(monkeypatch):
    FakeYoutubeDL.instances.clear()
    monkeypatch.setattr(downloader.yt_dlp, "YoutubeDL", FakeYoutubeDL)

    code = download(_request("song.mp3", source="ytsearch:lofi"))

    assert code == 0
    (ydl,) = FakeYoutubeDL.instances
    assert ydl.urls == ["ytsearch:lofi"]
    assert ydl.opts["outtmpl"] == "/media/out/song.%(ext)s"
