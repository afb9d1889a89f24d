"""
Resolver module — works out where a download should land.

Given "music/song.mp3" we create music/ if needed and return "music/song".
Given a bare "song.mp3" we fall back to a preferred media directory (if it is
a directory) or the current directory. The extension is always dropped; the
caller adds it back once yt-dlp has picked a container.
"""

import os
from pathlib import Path
from typing import Optional, Union

from rich.console import Console


console = Console()

PathLike = Union[str, Path]


class DirectoryCreationError(OSError):
    """A missing parent directory could not be created."""

    def __init__(self, path: Path, reason: OSError):
        super().__init__(reason.errno, f"could not create {path}: {reason.strerror or reason}")
        self.path = path
        self.reason = reason


def has_parent(filepath: PathLike) -> bool:
    """True if the path names a directory component, e.g. "a/b.mp3", "/b.mp3" or "./b.mp3"."""
    # Checked on the raw text: pathlib drops a leading "./"
    return os.path.dirname(os.fspath(filepath)) != ""


def resolve_filepath(
    filepath: PathLike,
    preferred_parent: Optional[PathLike] = None,
    out: Optional[Console] = None,
) -> Path:
    """
    Pick the target directory for filepath and return it joined with the stem.

    Args:
        filepath: Destination path; must carry an extension.
        preferred_parent: Fallback directory for bare filenames.
        out: Console for progress output. Defaults to the module console.

    Returns:
        Path: target directory / filepath stem. Not made absolute.

    Raises:
        DirectoryCreationError: A missing parent couldn't be created, or the
            parent names something that isn't a directory.
    """
    out = out or console

    if has_parent(filepath):
        parent_dir = Path(os.path.dirname(os.fspath(filepath)))
        if not parent_dir.is_dir():
            out.print(f"Creating parent directories... {parent_dir}", markup=False)
            try:
                parent_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreationError(parent_dir, e) from e
    elif preferred_parent is not None and Path(preferred_parent).is_dir():
        parent_dir = Path(preferred_parent)
    else:
        parent_dir = Path.cwd()

    return parent_dir / Path(filepath).stem
