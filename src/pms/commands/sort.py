"""
Sort command.

    sort                    sort by the configured default fields
    sort <field> [...]      sort by the given tags; the last is most significant

The cursor stays on the song it was on before sorting.
"""

from dataclasses import dataclass
from typing import Tuple

from pms.commands.base import Command
from pms.core.output import log
from pms.errors import NotFoundError, PreconditionError
from pms.input.lexer import Token


@dataclass(frozen=True)
class SortState:
    fields: Tuple[str, ...] = ()


class SortCommand(Command[SortState]):
    name = "sort"

    def initial_state(self) -> SortState:
        return SortState()

    def transition(self, state: SortState, token: Token) -> SortState:
        return SortState(fields=state.fields + (token.text.lower(),))

    def finish(self, state: SortState) -> SortState:
        songlist = self.ctx.active_songlist()
        if songlist is None:
            raise PreconditionError("Cannot sort: no songlist is open")

        fields = state.fields or tuple(self.ctx.config.songlist.default_sort)
        current = self.ctx.cursor_song()

        with songlist:
            songlist.sort(fields)
            position = 0
            if current is not None:
                try:
                    position = songlist.locate(current)
                except NotFoundError:
                    position = 0
        self.ctx.set_cursor(position)

        log(f"Sorted '{songlist.name}' by {', '.join(fields)}")
        return SortState(fields=fields)
