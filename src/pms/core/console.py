"""Terminal output for pms.

The prompt loop, help text and log() all print through one Console, so
lines written by commands land between prompts instead of on top of them.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the shared Console, creating it on first use."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def safe_print(message: str, style: str | None = None, markup: bool = True) -> None:
    """Print one message to the terminal.

    Song titles, file names and MPD error replies often contain square
    brackets; pass ``markup=False`` for those so Rich prints them verbatim.

    Args:
        message: Text to print
        style: Rich style for the whole line, e.g. "red" for errors
        markup: Interpret [tags] in message as Rich markup
    """
    console = get_console()
    if style:
        console.print(message, style=style, markup=markup)
    else:
        console.print(message, markup=markup)
