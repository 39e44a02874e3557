"""
Cursor command.

    cursor up | down | home | end | <position>
"""

from dataclasses import dataclass
from typing import Optional

from pms.commands.base import Command
from pms.errors import ParseError
from pms.input.lexer import Token

DIRECTIONS = ("up", "down", "home", "end")


def is_position(text: str) -> bool:
    # isdigit() also accepts superscripts, which int() rejects
    return text.isascii() and text.isdecimal()


@dataclass(frozen=True)
class CursorState:
    target: Optional[str] = None


class CursorCommand(Command[CursorState]):
    name = "cursor"

    def initial_state(self) -> CursorState:
        return CursorState()

    def transition(self, state: CursorState, token: Token) -> CursorState:
        if state.target is not None:
            raise ParseError(f"cursor: unexpected argument '{token.text}'")
        if token.text in DIRECTIONS or is_position(token.text):
            return CursorState(target=token.text)
        raise ParseError(
            f"cursor: unknown position '{token.text}', expected one of "
            f"{', '.join(DIRECTIONS)} or a number"
        )

    def finish(self, state: CursorState) -> CursorState:
        if state.target is None:
            raise ParseError("cursor: missing position")

        songlist = self.ctx.active_songlist()
        length = len(songlist) if songlist is not None else 0
        moves = {
            "up": self.ctx.cursor - 1,
            "down": self.ctx.cursor + 1,
            "home": 0,
            "end": length - 1,
        }
        index = moves[state.target] if state.target in moves else int(state.target)
        self.ctx.set_cursor(index)
        return state
