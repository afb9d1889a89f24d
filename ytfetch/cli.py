"""
CLI interface for ytfetch.
Handles user interaction and orchestrates the pipeline:

    filepath → expand ${VARS} → classify → resolve → source → yt-dlp
"""

import argparse
from pathlib import Path
from typing import Callable, List, Optional

import yt_dlp
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from ytfetch import __version__, __app_name__
from ytfetch.downloader import DownloadRequest, build_options, download
from ytfetch.expander import Aborted, expand_env
from ytfetch.media import (
    InvalidFilename,
    UnsupportedFormat,
    classify,
    is_youtube_url,
    preferred_parent,
    search_query,
)
from ytfetch.resolver import DirectoryCreationError, resolve_filepath


console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Download audio or video from YouTube into a resolved local path",
    )
    parser.add_argument(
        "filepath", nargs="?",
        help="Destination file, e.g. ~/Music/song.mp3 (prompted for if omitted)",
    )
    parser.add_argument(
        "url", nargs="?",
        help="YouTube URL or search text (prompted for if omitted)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print extra detail")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _ask(prompt: str) -> str:
    return Prompt.ask(prompt, console=console)


def get_filepath(verbose: bool, ask: Callable[[str], str] = _ask) -> Path:
    """Prompt for a destination and expand any ${VARS} in it."""
    raw = ask("[bold]Enter filepath[/bold]")
    return expand_env(raw, verbose, ask=ask, out=console)


def confirm_search(url: str, ask: Callable[[str], str] = _ask) -> bool:
    """Ask whether to search YouTube for text that isn't a URL. Re-asks until y/n."""
    while True:
        shown = escape(url)
        answer = ask(f"'{shown}' is not a valid URL. Search \"{shown}\" on youtube instead? (y/n)").strip().lower()
        if answer in ("y", "n"):
            return answer == "y"
        console.print(f"entered: '{answer}'", markup=False)
        console.print("[red]You may only type 'y' or 'n'.[/red]")


def main(argv: Optional[List[str]] = None, ask: Callable[[str], str] = _ask) -> int:
    """Main CLI flow. Returns the process exit status."""
    args = create_parser().parse_args(argv)
    verbose = args.verbose

    # Step 1: Destination path
    try:
        filepath = args.filepath if args.filepath else get_filepath(verbose, ask)
    except Aborted:
        console.print("[red]Aborting...[/red]")
        return 1

    # Step 2: Audio or video?
    try:
        kind = classify(filepath)
    except (InvalidFilename, UnsupportedFormat) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        return 1

    # Step 3: Resolve to an absolute path (extension re-added on output)
    try:
        destination = resolve_filepath(filepath, preferred_parent(kind), out=console).absolute()
    except DirectoryCreationError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        return 1

    console.print(f"{destination}.{kind.extension}", markup=False, highlight=False, soft_wrap=True)

    # Step 4: Source
    url = args.url or ask("[bold]Enter URL[/bold]")
    if not is_youtube_url(url):
        if not confirm_search(url, ask):
            return 1
        url = search_query(url)

    request = DownloadRequest(destination=destination, kind=kind, source=url, verbose=verbose)

    if verbose:
        console.print(build_options(request))

    # Step 5: Download
    console.print(f"[yellow]📥 Downloading {kind.category}...[/yellow]")
    try:
        code = download(request)
    except yt_dlp.utils.DownloadError as e:
        err_console.print(f"[red]Download failed:[/red] {escape(str(e))}", highlight=False)
        return 1

    if code == 0:
        console.print(f"[green]✅ Saved:[/green] {escape(request.target)}")
    return code


def run(argv: Optional[List[str]] = None) -> int:
    """Run main() the way both entry points do: Ctrl-C says goodbye, EOF fails."""
    try:
        return main(argv)
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")
        return 0
    except EOFError:
        print("\n\nNo input. Goodbye!")
        return 1


def entry_point():
    """Console-script entry point."""
    raise SystemExit(run())
