"""
Command routing for pms.

Lexes a command line, hands each statement's tokens to the command its
first word names, and reports failures without ending the session.
"""

from typing import Dict, List, Tuple, Type

from loguru import logger

from pms.commands.base import Command
from pms.commands.cursor import CursorCommand
from pms.commands.play import PlayCommand
from pms.commands.sort import SortCommand
from pms.context import AppContext
from pms.core.console import safe_print
from pms.core.output import log
from pms.errors import PmsError
from pms.input.lexer import Token, split_statements

COMMANDS: Dict[str, Type[Command]] = {
    "play": PlayCommand,
    "sort": SortCommand,
    "cursor": CursorCommand,
}

QUIT_WORDS = ("quit", "exit", "q")


def print_help() -> None:
    """Display help information for available commands."""
    help_text = """
pms - Practical Music Search

Available commands:
  play                 Resume playback of the queue
  play cursor          Play the song under the cursor
  sort [field ...]     Sort the current songlist (last field is most significant)
  cursor up|down       Move the cursor by one song
  cursor home|end      Move the cursor to the first or last song
  cursor <n>           Move the cursor to position n
  help                 Show this help message
  quit, exit           Exit the program

Separate several commands with ';', e.g.  cursor home; play cursor
"""
    safe_print(help_text.strip(), markup=False)


def run_statement(ctx: AppContext, tokens: List[Token]) -> None:
    """Create the command named by the first token and feed it the rest.

    Raises:
        PmsError: Whatever the command raises
    """
    verb = tokens[0].text.lower()
    command_cls = COMMANDS.get(verb)
    if command_cls is None:
        raise PmsError(f"Unknown command: '{verb}'. Type 'help' for available commands.")

    logger.debug(f"Running '{verb}' with {len(tokens) - 1} tokens")
    command = command_cls(ctx)
    for token in tokens[1:]:
        command.execute(token.cls, token.text)


def handle_line(ctx: AppContext, line: str) -> Tuple[AppContext, bool]:
    """
    Handle one line of user input.

    Statements run in order; the first failing statement stops the line.

    Args:
        ctx: Application context
        line: Raw user input

    Returns:
        (updated_context, should_continue) - Updated context and whether to continue
    """
    try:
        statements = split_statements(line)
    except PmsError as e:
        log(str(e), level="error")
        return ctx, True

    for tokens in statements:
        verb = tokens[0].text.lower()
        if verb in QUIT_WORDS:
            return ctx, False
        if verb == "help":
            print_help()
            continue

        try:
            run_statement(ctx, tokens)
        except PmsError as e:
            log(str(e), level="error")
            break

    return ctx, True
