"""
Expander module — expands ${NAME} placeholders in a user-supplied path.

Each placeholder is looked up in the process environment. When a variable
isn't defined the user gets a small menu:

    A → abort the whole run
    N → type a replacement value for this occurrence
    C → continue, keeping the literal ${NAME} text

The scan is a plain left-to-right walk over the string, so nested or
unterminated braces are simply treated as literal text.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt


console = Console()

OPEN = "${"
CLOSE = "}"


@dataclass(frozen=True)
class Placeholder:
    """A ${NAME} token found in the input."""
    token: str
    name: str


Segment = Union[str, Placeholder]


class MenuChoice(Enum):
    ABORT = "A"
    NEW = "N"
    CONTINUE = "C"


class InvalidMenuChoice(ValueError):
    """Raised when menu input isn't one of A, N or C."""


class Aborted(Exception):
    """The user chose to abort while resolving an undefined variable."""

    def __init__(self, name: str):
        super().__init__(f"aborted on undefined variable {name}")
        self.name = name


def iter_segments(text: str) -> Iterator[Segment]:
    """
    Split text into literal spans and placeholders, lazily.

    A placeholder is "${" followed by one or more characters that are not
    "}" and then "}". Anything else, including "${}" and a "${" that never
    closes, is yielded as literal text. Empty literal spans are skipped.
    """
    pos = 0
    literal_start = 0
    while True:
        start = text.find(OPEN, pos)
        if start == -1:
            break
        end = text.find(CLOSE, start + len(OPEN))
        if end == -1:
            break
        if end == start + len(OPEN):
            # "${}" has no name; keep scanning after the opening "$"
            pos = start + 1
            continue
        if start > literal_start:
            yield text[literal_start:start]
        yield Placeholder(token=text[start:end + 1], name=text[start + len(OPEN):end])
        pos = literal_start = end + 1

    if literal_start < len(text):
        yield text[literal_start:]


def parse_menu_choice(raw: str) -> MenuChoice:
    """Turn raw menu input into a MenuChoice (case-insensitive)."""
    code = (raw or "").strip().upper()
    try:
        return MenuChoice(code)
    except ValueError:
        raise InvalidMenuChoice(raw) from None


def _default_ask(prompt: str) -> str:
    return Prompt.ask(prompt, console=console)


def resolve_undefined(
    placeholder: Placeholder,
    ask: Callable[[str], str],
    out: Console = console,
) -> str:
    """
    Ask the user what to do about an undefined variable.

    Returns the text that should replace the placeholder. Raises Aborted if
    the user picks A. Any input other than A/N/C re-prompts.
    """
    while True:
        out.print(f"The Environment variable [bold]{escape(placeholder.name)}[/bold] doesn't exist.")
        out.print("1) Abort (A)")
        out.print("2) Enter new value (N)")
        out.print(f"3) Continue with '{placeholder.token}' (C)", markup=False)
        raw = ask("Enter option (A/N/C)")
        try:
            choice = parse_menu_choice(raw)
        except InvalidMenuChoice:
            out.print(f"entered: '{raw}'", markup=False)
            out.print("[red]You may only type 'A' or 'N' or 'C'.[/red]")
            continue
        break

    if choice is MenuChoice.ABORT:
        raise Aborted(placeholder.name)
    if choice is MenuChoice.NEW:
        # Taken as typed, empty string included
        return ask("Enter new value")
    return placeholder.token


def expand_env(
    text: str,
    verbose: bool = False,
    ask: Optional[Callable[[str], str]] = None,
    out: Optional[Console] = None,
) -> Path:
    """
    Expand every ${NAME} in text and return it as a normalized path.

    Args:
        text: The raw path string, e.g. "${HOME}/music/song.mp3".
        verbose: Print each matched placeholder as it's found.
        ask: Callable used to read user input. Defaults to rich's Prompt.ask.
        out: Console for menu output. Defaults to the module console.

    Returns:
        Path: The expanded path, lexically normalized (no filesystem access).

    Raises:
        Aborted: The user chose to abort on an undefined variable.
    """
    ask = ask or _default_ask
    out = out or console

    parts = []
    for segment in iter_segments(text):
        if isinstance(segment, str):
            parts.append(segment)
            continue

        if verbose:
            out.print(f"[dim]{escape(segment.token)}[/dim]", highlight=False)

        value = os.environ.get(segment.name)
        if value is None:
            value = resolve_undefined(segment, ask, out)
        parts.append(value)

    return Path(os.path.normpath("".join(parts)))
