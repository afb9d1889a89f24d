"""
Entry point for running ytfetch as a module: python -m ytfetch

Usage:
    python -m ytfetch                          → prompts for path and URL
    python -m ytfetch song.mp3 <url>           → no prompts
    python -m ytfetch -v music/a.flac          → verbose, prompts for URL
"""

import sys

from ytfetch.cli import run


if __name__ == "__main__":
    sys.exit(run())
