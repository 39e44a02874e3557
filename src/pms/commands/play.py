"""
Play command.

    play            resume playback of the queue
    play cursor     play the song under the cursor, adding it to the
                    queue first if MPD does not know it yet
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from pms.commands.base import Command
from pms.domain.song import Song, get_display_name
from pms.errors import PreconditionError
from pms.input.lexer import Token


class PlayPhase(Enum):
    START = "start"
    CURSOR_SELECTED = "cursor_selected"
    FINISHED = "finished"


@dataclass(frozen=True)
class PlayState:
    phase: PlayPhase = PlayPhase.START
    song: Optional[Song] = None


class PlayCommand(Command[PlayState]):
    name = "play"

    def initial_state(self) -> PlayState:
        return PlayState()

    def transition(self, state: PlayState, token: Token) -> PlayState:
        if token.text != "cursor":
            # Tolerate modifiers this grammar does not know
            return state

        song = self.ctx.cursor_song()
        if song is None:
            raise PreconditionError("Cannot play: no song under cursor")
        return PlayState(phase=PlayPhase.CURSOR_SELECTED, song=song)

    def finish(self, state: PlayState) -> PlayState:
        client = self.ctx.daemon_client()
        if client is None:
            raise PreconditionError("Cannot play: not connected to MPD")

        if state.song is None:
            client.play(-1)
            return PlayState(phase=PlayPhase.FINISHED)

        song_id = state.song.id
        if state.song.null_id():
            song_id = client.add_id(state.song.file, -1)
            logger.debug(f"Added '{state.song.file}' to queue as id {song_id}")

        client.play_id(song_id)
        logger.info(f"Playing {get_display_name(state.song)}")
        return PlayState(phase=PlayPhase.FINISHED, song=state.song)
